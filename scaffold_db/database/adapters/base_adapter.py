# ==============================================================================
# BASE DATABASE ADAPTER - Abstract Interface
# ==============================================================================
# Defines the contract for all database adapters
# Ensures consistent behavior across Supabase and SQLite
# ==============================================================================

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy import Table

from scaffold_db.core.exceptions import DatabaseQueryError
from scaffold_db.core.settings import settings
from scaffold_db.schemas.base import (
    FilterOptions,
    OrderByInput,
    OrderByOptions,
    PaginatedResult,
    PaginationInput,
    PaginationOptions,
    coerce_order_by,
    coerce_pagination,
)
from scaffold_db.utils.case_conversion import camel_to_snake, camel_to_snake_keys
from scaffold_db.utils.helpers import generate_uuid, serialize_value, utc_now_iso

# A stored row with camelCase keys, as handed back to repositories
Record = Dict[str, Any]

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DEFAULT_ORDER = OrderByOptions(column="created_at", ascending=False)
TIE_BREAK_COLUMN = "id"


class BaseDatabaseAdapter(ABC):
    """
    Abstract Base Class for Database Adapters.

    Provides a unified interface for CRUD operations across different
    database backends. All concrete adapters must implement these methods
    so that repositories behave identically whichever backend is active.

    Contract:
        - Every read excludes soft-deleted rows (``deleted_at`` set)
        - Read-path "not found" returns None, never raises
        - ``update``/``soft_delete``/``hard_delete`` raise
          DatabaseNotFoundError when no row was affected
        - Input and output dictionaries use camelCase keys; adapters
          translate to the backend's snake_case columns

    Example:
        >>> adapter = SQLiteAdapter(":memory:")
        >>> await adapter.connect()
        >>> user = await adapter.create("users", {"email": "test@example.com"})
        >>> await adapter.disconnect()
    """

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish database connection.

        Must be called before any database operations.

        Raises:
            DatabaseConnectionError: If connection cannot be established
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the backend handle."""

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if database connection is healthy.

        Returns:
            True if connection is healthy, False otherwise
        """

    @abstractmethod
    async def ensure_schema(self, table: Table) -> None:
        """
        Make sure ``table`` exists in the backend.

        Safe to call repeatedly.
        """

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def create(self, collection: str, data: Dict[str, Any]) -> Record:
        """
        Insert a new record.

        The adapter assigns ``id``, ``createdAt`` and ``updatedAt``.

        Args:
            collection: Table name
            data: Field values (camelCase or snake_case keys)

        Returns:
            The stored record

        Raises:
            DatabaseConstraintError: If a uniqueness/foreign key check fails
        """

    @abstractmethod
    async def find_by_id(self, collection: str, id: str) -> Optional[Record]:
        """Live record with this id, or None."""

    @abstractmethod
    async def find_many(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
        order_by: OrderByInput = None,
        pagination: PaginationInput = None,
    ) -> List[Record]:
        """
        Live records matching every filter entry.

        Args:
            collection: Table name
            filters: Field-value equality pairs
            order_by: Sort key (defaults to newest first)
            pagination: Page window (defaults to all rows)

        Returns:
            List of matching records
        """

    @abstractmethod
    async def find_with_pagination(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
        order_by: OrderByInput = None,
        pagination: PaginationInput = None,
    ) -> PaginatedResult[Record]:
        """
        One page of live records plus the total count.

        Defaults to page 1 with 10 items per page.
        """

    @abstractmethod
    async def update(
        self,
        collection: str,
        id: str,
        data: Dict[str, Any],
    ) -> Record:
        """
        Update a live record and refresh ``updatedAt``.

        Raises:
            DatabaseNotFoundError: If no live record has this id
        """

    @abstractmethod
    async def soft_delete(self, collection: str, id: str) -> None:
        """
        Mark a live record deleted.

        Raises:
            DatabaseNotFoundError: If no live record has this id
        """

    @abstractmethod
    async def hard_delete(self, collection: str, id: str) -> None:
        """
        Physically remove a record, soft-deleted or not.

        Raises:
            DatabaseNotFoundError: If no record has this id
        """

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def count(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
    ) -> int:
        """Number of live records matching the filters."""

    @abstractmethod
    async def find_first(
        self,
        collection: str,
        filters: Optional[FilterOptions] = None,
    ) -> Optional[Record]:
        """
        First live record matching the filters, or None.

        When several match, the one with the lowest id is returned.
        """

    # ==========================================================================
    # SHARED HELPERS
    # ==========================================================================

    @staticmethod
    def validate_identifier(name: str) -> str:
        """
        Reject table/column names that are not plain identifiers.

        Raises:
            DatabaseQueryError: If the name is not a valid identifier
        """
        if not isinstance(name, str) or not _IDENTIFIER.match(name):
            raise DatabaseQueryError(
                f"Invalid identifier: {name!r}",
                details={"identifier": repr(name)},
            )
        return name

    def prepare_filters(self, filters: Optional[FilterOptions]) -> Dict[str, Any]:
        """snake_case filter entries, skipping those whose value is None."""
        if not filters:
            return {}
        return {
            self.validate_identifier(camel_to_snake(key)): serialize_value(value)
            for key, value in filters.items()
            if value is not None
        }

    def prepare_order(self, order_by: OrderByInput) -> OrderByOptions:
        """Resolved sort key in snake_case; newest first when omitted."""
        order = coerce_order_by(order_by) or DEFAULT_ORDER
        column = self.validate_identifier(camel_to_snake(order.column))
        return OrderByOptions(column=column, ascending=order.ascending)

    @staticmethod
    def prepare_pagination(
        pagination: PaginationInput,
        default: bool = False,
    ) -> Optional[PaginationOptions]:
        """Coerce pagination input; fall back to page 1 of the default size if asked."""
        options = coerce_pagination(pagination)
        if options is None and default:
            options = PaginationOptions(limit=settings.DEFAULT_PAGE_SIZE)
        return options

    def prepare_insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Build the snake_case row for an insert.

        A fresh id and a single timestamp for both ``created_at`` and
        ``updated_at`` are assigned here. Caller-supplied values for these
        keys are overridden.
        """
        row = self._prepare_values(data)
        now = utc_now_iso()
        row.pop("deleted_at", None)
        row["id"] = generate_uuid()
        row["created_at"] = now
        row["updated_at"] = now
        return row

    def prepare_update(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """snake_case update values with a refreshed ``updated_at``."""
        row = self._prepare_values(data)
        for key in ("id", "created_at", "deleted_at"):
            row.pop(key, None)
        row["updated_at"] = utc_now_iso()
        return row

    def _prepare_values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        row = camel_to_snake_keys(data)
        for key in row:
            self.validate_identifier(key)
        return {key: serialize_value(value) for key, value in row.items()}
