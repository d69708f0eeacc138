# ==============================================================================
# SUPABASE ADAPTER - Hosted Postgres through the PostgREST Query Builder
# ==============================================================================
# Composes fluent filter/order/range chains on a Supabase async client
# Backend errors are normalized into the DatabaseError family
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from postgrest.types import CountMethod
from sqlalchemy import Table
from supabase import acreate_client
from supabase.lib.client_options import AsyncClientOptions

from scaffold_db.core.exceptions import (
    DatabaseConnectionError,
    DatabaseConstraintError,
    DatabaseError,
    DatabaseNotFoundError,
    DatabaseQueryError,
    DatabaseValidationError,
)
from scaffold_db.core.settings import settings
from scaffold_db.database.adapters.base_adapter import (
    TIE_BREAK_COLUMN,
    BaseDatabaseAdapter,
    Record,
)
from scaffold_db.database.adapters.query_protocols import (
    ExecutableQuery,
    FilterBuilder,
    QueryResponse,
    SelectQuery,
    TableClient,
)
from scaffold_db.schemas.base import (
    FilterOptions,
    OrderByInput,
    PaginatedResult,
    PaginationInput,
    PaginationMeta,
)
from scaffold_db.utils.case_conversion import snake_to_camel_keys
from scaffold_db.utils.helpers import utc_now_iso

logger = logging.getLogger(__name__)

# PostgREST "no rows" condition
NO_ROWS_CODE = "PGRST116"
# PostgREST "requested range not satisfiable"
RANGE_NOT_SATISFIABLE_CODE = "PGRST103"

QUERY_ERROR_CODES = frozenset({"PGRST204", "PGRST301", "42703", "42P01", "PGRST100"})
CONSTRAINT_ERROR_CODES = frozenset({"PGRST103", "23505", "23503", "23502", "23514"})
VALIDATION_ERROR_CODES = frozenset({"PGRST202", "22P02", "22007", "22001"})
CONNECTION_ERROR_CODES = frozenset({"PGRST000"})


def translate_api_error(error: APIError, operation: str, collection: str) -> DatabaseError:
    """
    Map a PostgREST error onto the storage exception family.

    Args:
        error: Error raised by the query builder
        operation: Adapter operation name, for context
        collection: Table the call ran against

    Returns:
        The exception to raise (never raises itself)
    """
    code = error.code or ""
    message = error.message or str(error)
    details = {
        "code": code,
        "operation": operation,
        "collection": collection,
    }
    if error.details:
        details["backend_details"] = error.details
    if error.hint:
        details["hint"] = error.hint

    if code == NO_ROWS_CODE:
        return DatabaseNotFoundError(message, resource_type=collection)
    if code in QUERY_ERROR_CODES:
        return DatabaseQueryError(message, details=details)
    if code in CONSTRAINT_ERROR_CODES:
        return DatabaseConstraintError(message, details=details)
    if code in VALIDATION_ERROR_CODES:
        return DatabaseValidationError(message, details=details)
    if code in CONNECTION_ERROR_CODES:
        return DatabaseConnectionError(message, details=details)
    return DatabaseError(message, details=details)


class SupabaseAdapter(BaseDatabaseAdapter):
    """
    Supabase (PostgREST) database adapter.

    Every operation is a single fluent chain on ``client.table(name)``:
    one ``eq`` per filter entry, the ``deleted_at is null`` predicate,
    an ``order`` pair and an inclusive ``range`` window.

    The adapter talks to the client only through the protocols in
    ``query_protocols``, so a test double can replace the real client.

    Attributes:
        _client: Query-builder client (``supabase.AsyncClient`` in production)
        _owns_client: Whether ``connect()`` created the client

    Example:
        >>> adapter = SupabaseAdapter()
        >>> await adapter.connect()
        >>> user = await adapter.find_first("users", {"email": "a@x.com"})
    """

    def __init__(
        self,
        client: Optional[TableClient] = None,
        url: Optional[str] = None,
        key: Optional[str] = None,
        health_table: str = "users",
    ) -> None:
        """
        Initialize Supabase adapter.

        Args:
            client: Pre-built client; when omitted one is created on connect
            url: Project URL (defaults to settings.SUPABASE_URL)
            key: API key (defaults to service key, then anon key)
            health_table: Table probed by ``health_check``
        """
        self._client: Optional[TableClient] = client
        self._owns_client = client is None
        self._url = url or settings.SUPABASE_URL
        self._key = key or settings.supabase_key
        self._health_table = health_table

    @property
    def client(self) -> TableClient:
        if self._client is None:
            raise DatabaseConnectionError(
                "Supabase adapter not connected. Call connect() first."
            )
        return self._client

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """Create the async Supabase client unless one was injected."""
        if self._client is not None:
            logger.info("Supabase adapter using injected client")
            return

        if not self._url or not self._key:
            raise DatabaseConnectionError(
                "Supabase is not configured: SUPABASE_URL and a key are required"
            )

        options = AsyncClientOptions(
            headers={"X-Client-Info": settings.SUPABASE_CLIENT_INFO},
            auto_refresh_token=False,
            persist_session=False,
            postgrest_client_timeout=settings.SUPABASE_TIMEOUT,
        )
        try:
            self._client = await acreate_client(self._url, self._key, options=options)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to create Supabase client: {e}")
            raise DatabaseConnectionError(f"Supabase connection failed: {e}") from e

        logger.info("Supabase adapter connected successfully")

    async def disconnect(self) -> None:
        """Drop the client reference if this adapter created it."""
        if self._owns_client and self._client is not None:
            self._client = None
            logger.info("Supabase adapter disconnected")

    async def health_check(self) -> bool:
        """
        Verify connectivity with a head-only count on the health table.

        Returns:
            True if the request succeeded
        """
        try:
            await self._execute(
                self.client.table(self._health_table).select(
                    TIE_BREAK_COLUMN, count=CountMethod.exact, head=True
                ),
                "health_check",
                self._health_table,
            )
            return True
        except DatabaseError as e:
            logger.warning(f"Supabase health check failed: {e.message}")
            return False

    async def ensure_schema(self, table: Table) -> None:
        """Tables on the hosted backend are owned by migrations."""
        logger.debug(f"Schema for '{table.name}' is managed remotely")

    # ==========================================================================
    # QUERY HELPERS
    # ==========================================================================

    async def _execute(
        self,
        query: ExecutableQuery,
        operation: str,
        collection: str,
    ) -> QueryResponse:
        """Run a built query, translating backend and transport errors."""
        try:
            return await query.execute()
        except APIError as e:
            error = translate_api_error(e, operation, collection)
            if not isinstance(error, DatabaseNotFoundError):
                logger.error(
                    f"Supabase {operation} on '{collection}' failed "
                    f"[{e.code}]: {error.message}"
                )
            raise error from e
        except httpx.HTTPError as e:
            logger.error(f"Supabase {operation} on '{collection}' unreachable: {e}")
            raise DatabaseConnectionError(
                f"Supabase request failed: {e}",
                details={"operation": operation, "collection": collection},
            ) from e

    @staticmethod
    def _apply_filters(query: FilterBuilder, filters: Dict[str, Any]) -> Any:
        for column, value in filters.items():
            query = query.eq(column, value)
        return query.is_("deleted_at", "null")

    def _select(
        self,
        collection: str,
        filters: Optional[FilterOptions],
        count: Optional[CountMethod] = None,
        head: Optional[bool] = None,
    ) -> SelectQuery:
        query = self.client.table(collection).select("*", count=count, head=head)
        return self._apply_filters(query, self.prepare_filters(filters))

    def _ordered(self, query: SelectQuery, order_by: OrderByInput) -> SelectQuery:
        order = self.prepare_order(order_by)
        query = query.order(order.column, desc=not order.ascending)
        if order.column != TIE_BREAK_COLUMN:
            query = query.order(TIE_BREAK_COLUMN, desc=False)
        return query

    @staticmethod
    def _to_records(rows: Optional[List[Dict[str, Any]]]) -> List[Record]:
        return snake_to_camel_keys(list(rows or []))

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(self, collection: str, data: Dict[str, Any]) -> Record:
        row = self.prepare_insert(data)
        response = await self._execute(
            self.client.table(collection).insert(row), "create", collection
        )
        if not response.data:
            raise DatabaseError(
                f"Insert into '{collection}' returned no row",
                details={"collection": collection},
            )
        logger.debug(f"Created {collection} record {row['id']}")
        return self._to_records(response.data)[0]

    async def find_by_id(self, collection: str, id: str) -> Optional[Record]:
        query = self._select(collection, {"id": id}).limit(1)
        try:
            response = await self._execute(query, "find_by_id", collection)
        except DatabaseNotFoundError:
            return None
        records = self._to_records(response.data)
        return records[0] if records else None

    async def find_many(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
        order_by: OrderByInput = None,
        pagination: PaginationInput = None,
    ) -> List[Record]:
        query = self._ordered(self._select(collection, filters), order_by)
        window = self.prepare_pagination(pagination)
        if window is not None:
            query = query.range(window.offset, window.offset + window.limit - 1)
        response = await self._execute(query, "find_many", collection)
        return self._to_records(response.data)

    async def find_with_pagination(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
        order_by: OrderByInput = None,
        pagination: PaginationInput = None,
    ) -> PaginatedResult[Record]:
        window = self.prepare_pagination(pagination, default=True)
        query = self._ordered(
            self._select(collection, filters, count=CountMethod.exact),
            order_by,
        ).range(window.offset, window.offset + window.limit - 1)

        try:
            response = await self._execute(query, "find_with_pagination", collection)
        except DatabaseConstraintError as e:
            # A window past the last row is rejected with a range error
            if e.details.get("code") != RANGE_NOT_SATISFIABLE_CODE:
                raise
            total = await self.count(collection, filters)
            return PaginatedResult[Record](
                data=[],
                pagination=PaginationMeta.build(window.page, window.limit, total),
            )

        records = self._to_records(response.data)
        total = response.count if response.count is not None else len(records)
        return PaginatedResult[Record](
            data=records,
            pagination=PaginationMeta.build(window.page, window.limit, total),
        )

    async def update(
        self,
        collection: str,
        id: str,
        data: Dict[str, Any],
    ) -> Record:
        values = self.prepare_update(data)
        query = (
            self.client.table(collection)
            .update(values)
            .eq("id", id)
            .is_("deleted_at", "null")
        )
        response = await self._execute(query, "update", collection)
        if not response.data:
            raise DatabaseNotFoundError(
                f"{collection} record not found: {id}",
                resource_type=collection,
                resource_id=id,
            )
        return self._to_records(response.data)[0]

    async def soft_delete(self, collection: str, id: str) -> None:
        now = utc_now_iso()
        query = (
            self.client.table(collection)
            .update({"deleted_at": now, "updated_at": now})
            .eq("id", id)
            .is_("deleted_at", "null")
        )
        response = await self._execute(query, "soft_delete", collection)
        if not response.data:
            raise DatabaseNotFoundError(
                f"{collection} record not found: {id}",
                resource_type=collection,
                resource_id=id,
            )
        logger.debug(f"Soft-deleted {collection} record {id}")

    async def hard_delete(self, collection: str, id: str) -> None:
        query = self.client.table(collection).delete().eq("id", id)
        response = await self._execute(query, "hard_delete", collection)
        if not response.data:
            raise DatabaseNotFoundError(
                f"{collection} record not found: {id}",
                resource_type=collection,
                resource_id=id,
            )
        logger.debug(f"Hard-deleted {collection} record {id}")

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
    ) -> int:
        query = self._select(collection, filters, count=CountMethod.exact, head=True)
        response = await self._execute(query, "count", collection)
        return response.count or 0

    async def find_first(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
    ) -> Optional[Record]:
        query = (
            self._select(collection, filters)
            .order(TIE_BREAK_COLUMN, desc=False)
            .limit(1)
        )
        try:
            response = await self._execute(query, "find_first", collection)
        except DatabaseNotFoundError:
            return None
        records = self._to_records(response.data)
        return records[0] if records else None
