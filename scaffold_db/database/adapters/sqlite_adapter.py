# ==============================================================================
# SQLITE ADAPTER - Parameterized SQL over SQLAlchemy Async with aiosqlite
# ==============================================================================
# Embedded database adapter for development, testing and single-node use
# All access is serialized through one shared connection
# ==============================================================================

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

from sqlalchemy import JSON, Boolean, Table, text
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from scaffold_db.core.exceptions import (
    DatabaseConnectionError,
    DatabaseConstraintError,
    DatabaseError,
    DatabaseNotFoundError,
    DatabaseQueryError,
)
from scaffold_db.core.settings import settings
from scaffold_db.database.adapters.base_adapter import (
    TIE_BREAK_COLUMN,
    BaseDatabaseAdapter,
    Record,
)
from scaffold_db.schemas.base import (
    FilterOptions,
    OrderByInput,
    PaginatedResult,
    PaginationInput,
    PaginationMeta,
    PaginationOptions,
)
from scaffold_db.utils.case_conversion import snake_to_camel_keys
from scaffold_db.utils.helpers import utc_now_iso

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

# OperationalError messages caused by the statement rather than the database
_QUERY_ERROR_MARKERS = ("no such table", "no such column", "has no column named", "syntax error")


def translate_sqlite_error(error: DBAPIError, operation: str, collection: str) -> DatabaseError:
    """
    Map a SQLAlchemy/sqlite3 error onto the storage exception family.

    Returns:
        The exception to raise (never raises itself)
    """
    message = str(error.orig) if error.orig is not None else str(error)
    details = {"operation": operation, "collection": collection}

    if isinstance(error, IntegrityError):
        return DatabaseConstraintError(message, details=details)
    if isinstance(error, OperationalError):
        lowered = message.lower()
        if any(marker in lowered for marker in _QUERY_ERROR_MARKERS):
            return DatabaseQueryError(message, details=details)
        return DatabaseConnectionError(message, details=details)
    return DatabaseError(message, details=details)


def to_storage(value: Any) -> Any:
    """SQLite has no boolean or JSON types; store them as 0/1 and text."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return value


class SQLiteAdapter(BaseDatabaseAdapter):
    """
    SQLite database adapter using SQLAlchemy async with aiosqlite.

    Statements are plain SQL text with named parameters; only validated
    identifiers are interpolated. The engine holds a single connection
    (``StaticPool``) and an ``asyncio.Lock`` serializes every call on it.

    Features:
        - WAL journal, foreign keys and busy timeout applied on connect
        - Tables created on demand through ``ensure_schema``
        - Boolean and JSON columns decoded for registered tables
        - File-based or in-memory database support

    Attributes:
        _database_path: Database file path or ":memory:"
        _engine: SQLAlchemy async engine
        _lock: Serializes access to the shared connection
        _tables: Tables registered through ``ensure_schema``

    Example:
        >>> adapter = SQLiteAdapter("./data/app.db")
        >>> await adapter.connect()
        >>> await adapter.ensure_schema(users)
        >>> user = await adapter.create("users", {"email": "test@example.com"})
    """

    def __init__(
        self,
        database_path: Optional[str] = None,
        enable_wal: Optional[bool] = None,
        enable_foreign_keys: Optional[bool] = None,
        busy_timeout: Optional[int] = None,
    ) -> None:
        """
        Initialize SQLite adapter.

        Args:
            database_path: Database file path (defaults to settings.SQLITE_PATH)
            enable_wal: Use the WAL journal (defaults to settings)
            enable_foreign_keys: Enforce foreign keys (defaults to settings)
            busy_timeout: Lock wait in milliseconds (defaults to settings)
        """
        self._database_path = database_path or settings.SQLITE_PATH
        self._enable_wal = (
            settings.SQLITE_ENABLE_WAL if enable_wal is None else enable_wal
        )
        self._enable_foreign_keys = (
            settings.SQLITE_ENABLE_FOREIGN_KEYS
            if enable_foreign_keys is None
            else enable_foreign_keys
        )
        self._busy_timeout = (
            settings.SQLITE_TIMEOUT if busy_timeout is None else busy_timeout
        )
        self._engine: Optional[AsyncEngine] = None
        self._lock = asyncio.Lock()
        self._tables: Dict[str, Table] = {}

    @property
    def database_url(self) -> str:
        if self._database_path == MEMORY_PATH:
            return "sqlite+aiosqlite://"
        return f"sqlite+aiosqlite:///{self._database_path}"

    @property
    def is_memory(self) -> bool:
        return self._database_path == MEMORY_PATH

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Create the engine and apply connection pragmas.

        Creates the database directory when it does not exist.
        """
        if self._engine is not None:
            return

        try:
            if not self.is_memory:
                Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)

            self._engine = create_async_engine(
                self.database_url,
                echo=settings.DEBUG,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
            await self._configure_pragmas()

            logger.info(f"SQLite adapter connected: {self._database_path}")

        except (OSError, DBAPIError) as e:
            logger.error(f"Failed to connect to SQLite: {e}")
            self._engine = None
            raise DatabaseConnectionError(f"SQLite connection failed: {e}") from e

    async def _configure_pragmas(self) -> None:
        """
        Apply SQLite-specific PRAGMA settings.

        The pool keeps one connection, so these hold for its lifetime.
        """
        async with self._engine.connect() as conn:
            if self._enable_wal and not self.is_memory:
                await conn.execute(text("PRAGMA journal_mode=WAL"))
            foreign_keys = "ON" if self._enable_foreign_keys else "OFF"
            await conn.execute(text(f"PRAGMA foreign_keys={foreign_keys}"))
            await conn.execute(text("PRAGMA synchronous=NORMAL"))
            await conn.execute(text(f"PRAGMA busy_timeout={int(self._busy_timeout)}"))
            await conn.commit()

    async def disconnect(self) -> None:
        """Dispose the engine and its connection."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("SQLite adapter disconnected")

    async def health_check(self) -> bool:
        """
        Verify database connectivity.

        Returns:
            True if connection is healthy
        """
        try:
            async with self._transaction("health_check", "") as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except DatabaseError as e:
            logger.warning(f"SQLite health check failed: {e.message}")
            return False

    async def ensure_schema(self, table: Table) -> None:
        """Create ``table`` and its indexes if missing, and register it."""
        async with self._transaction("ensure_schema", table.name) as conn:
            await conn.run_sync(table.create, checkfirst=True)
        self._tables[table.name] = table
        logger.debug(f"Schema ensured for '{table.name}'")

    # ==========================================================================
    # CONNECTION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def _transaction(
        self,
        operation: str,
        collection: str,
    ) -> AsyncIterator[AsyncConnection]:
        """
        Serialized transactional scope on the shared connection.

        Commits on successful exit, rolls back on exception. Driver errors
        are translated into the DatabaseError family.
        """
        if self._engine is None:
            raise DatabaseConnectionError(
                "Database not connected. Call connect() first."
            )

        try:
            async with self._lock:
                async with self._engine.begin() as conn:
                    yield conn
        except DBAPIError as e:
            error = translate_sqlite_error(e, operation, collection)
            logger.error(f"SQLite {operation} on '{collection}' failed: {error.message}")
            raise error from e

    # ==========================================================================
    # SQL BUILDING
    # ==========================================================================

    def _table_name(self, collection: str) -> str:
        return self.validate_identifier(collection)

    def _where(self, filters: Optional[FilterOptions]) -> Tuple[str, Dict[str, Any]]:
        """WHERE clause starting with the live-record predicate."""
        clauses = ["deleted_at IS NULL"]
        params: Dict[str, Any] = {}
        for index, (column, value) in enumerate(self.prepare_filters(filters).items()):
            name = f"p{index}"
            clauses.append(f"{column} = :{name}")
            params[name] = to_storage(value)
        return " WHERE " + " AND ".join(clauses), params

    def _order_clause(self, order_by: OrderByInput) -> str:
        order = self.prepare_order(order_by)
        direction = "ASC" if order.ascending else "DESC"
        clause = f" ORDER BY {order.column} {direction}"
        if order.column != TIE_BREAK_COLUMN:
            clause += f", {TIE_BREAK_COLUMN} ASC"
        return clause

    @staticmethod
    def _limit_clause(
        window: Optional[PaginationOptions],
        params: Dict[str, Any],
    ) -> str:
        if window is None:
            return ""
        params["limit"] = window.limit
        params["offset"] = window.offset
        return " LIMIT :limit OFFSET :offset"

    def _decode(self, collection: str, row: Any) -> Record:
        """Row mapping to a camelCase record, restoring bool/JSON values."""
        values = dict(row)
        table = self._tables.get(collection)
        if table is not None:
            for column in table.columns:
                value = values.get(column.name)
                if value is None:
                    continue
                if isinstance(column.type, Boolean):
                    values[column.name] = bool(value)
                elif isinstance(column.type, JSON) and isinstance(value, str):
                    try:
                        values[column.name] = json.loads(value)
                    except ValueError:
                        logger.warning(
                            f"Undecodable JSON in {collection}.{column.name}"
                        )
        return snake_to_camel_keys(values)

    async def _fetch_live(
        self,
        conn: AsyncConnection,
        table: str,
        id: str,
    ) -> Optional[Record]:
        result = await conn.execute(
            text(f"SELECT * FROM {table} WHERE deleted_at IS NULL AND id = :id LIMIT 1"),
            {"id": id},
        )
        row = result.mappings().first()
        return self._decode(table, row) if row is not None else None

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(self, collection: str, data: Dict[str, Any]) -> Record:
        table = self._table_name(collection)
        row = self.prepare_insert(data)
        params = {f"v{index}": to_storage(value) for index, value in enumerate(row.values())}
        columns = ", ".join(row)
        placeholders = ", ".join(f":{name}" for name in params)

        async with self._transaction("create", table) as conn:
            await conn.execute(
                text(f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"),
                params,
            )
            record = await self._fetch_live(conn, table, row["id"])

        logger.debug(f"Created {table} record {row['id']}")
        return record

    async def find_by_id(self, collection: str, id: str) -> Optional[Record]:
        table = self._table_name(collection)
        async with self._transaction("find_by_id", table) as conn:
            return await self._fetch_live(conn, table, id)

    async def find_many(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
        order_by: OrderByInput = None,
        pagination: PaginationInput = None,
    ) -> List[Record]:
        table = self._table_name(collection)
        where, params = self._where(filters)
        sql = (
            f"SELECT * FROM {table}{where}"
            f"{self._order_clause(order_by)}"
            f"{self._limit_clause(self.prepare_pagination(pagination), params)}"
        )
        async with self._transaction("find_many", table) as conn:
            result = await conn.execute(text(sql), params)
            rows = result.mappings().all()
        return [self._decode(table, row) for row in rows]

    async def find_with_pagination(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
        order_by: OrderByInput = None,
        pagination: PaginationInput = None,
    ) -> PaginatedResult[Record]:
        table = self._table_name(collection)
        window = self.prepare_pagination(pagination, default=True)
        where, params = self._where(filters)
        count_sql = f"SELECT COUNT(*) FROM {table}{where}"
        data_params = dict(params)
        data_sql = (
            f"SELECT * FROM {table}{where}"
            f"{self._order_clause(order_by)}"
            f"{self._limit_clause(window, data_params)}"
        )

        async with self._transaction("find_with_pagination", table) as conn:
            total = (await conn.execute(text(count_sql), params)).scalar_one()
            rows = (await conn.execute(text(data_sql), data_params)).mappings().all()

        return PaginatedResult[Record](
            data=[self._decode(table, row) for row in rows],
            pagination=PaginationMeta.build(window.page, window.limit, total),
        )

    async def update(
        self,
        collection: str,
        id: str,
        data: Dict[str, Any],
    ) -> Record:
        table = self._table_name(collection)
        values = self.prepare_update(data)
        params = {f"v{index}": to_storage(value) for index, value in enumerate(values.values())}
        assignments = ", ".join(
            f"{column} = :{name}" for column, name in zip(values, params)
        )
        params["id"] = id

        async with self._transaction("update", table) as conn:
            result = await conn.execute(
                text(
                    f"UPDATE {table} SET {assignments} "
                    f"WHERE deleted_at IS NULL AND id = :id"
                ),
                params,
            )
            if result.rowcount == 0:
                raise DatabaseNotFoundError(
                    f"{table} record not found: {id}",
                    resource_type=table,
                    resource_id=id,
                )
            return await self._fetch_live(conn, table, id)

    async def soft_delete(self, collection: str, id: str) -> None:
        table = self._table_name(collection)
        async with self._transaction("soft_delete", table) as conn:
            result = await conn.execute(
                text(
                    f"UPDATE {table} SET deleted_at = :now, updated_at = :now "
                    f"WHERE deleted_at IS NULL AND id = :id"
                ),
                {"now": utc_now_iso(), "id": id},
            )
            if result.rowcount == 0:
                raise DatabaseNotFoundError(
                    f"{table} record not found: {id}",
                    resource_type=table,
                    resource_id=id,
                )
        logger.debug(f"Soft-deleted {table} record {id}")

    async def hard_delete(self, collection: str, id: str) -> None:
        table = self._table_name(collection)
        async with self._transaction("hard_delete", table) as conn:
            result = await conn.execute(
                text(f"DELETE FROM {table} WHERE id = :id"),
                {"id": id},
            )
            if result.rowcount == 0:
                raise DatabaseNotFoundError(
                    f"{table} record not found: {id}",
                    resource_type=table,
                    resource_id=id,
                )
        logger.debug(f"Hard-deleted {table} record {id}")

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
    ) -> int:
        table = self._table_name(collection)
        where, params = self._where(filters)
        async with self._transaction("count", table) as conn:
            result = await conn.execute(text(f"SELECT COUNT(*) FROM {table}{where}"), params)
            return result.scalar_one()

    async def find_first(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
    ) -> Optional[Record]:
        table = self._table_name(collection)
        where, params = self._where(filters)
        sql = f"SELECT * FROM {table}{where} ORDER BY {TIE_BREAK_COLUMN} ASC LIMIT 1"
        async with self._transaction("find_first", table) as conn:
            row = (await conn.execute(text(sql), params)).mappings().first()
        return self._decode(table, row) if row is not None else None

    # ==========================================================================
    # RAW QUERY EXECUTION
    # ==========================================================================

    async def execute_raw(
        self,
        query: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Execute a raw SQL statement and return its rows (snake_case keys).

        Bypasses the live-record predicate, so soft-deleted rows are visible.
        """
        async with self._transaction("execute_raw", "") as conn:
            result = await conn.execute(text(query), params or {})
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings().all()]
