# ==============================================================================
# BASE REPOSITORY - Generic Data Access Abstraction
# ==============================================================================
# Repository Pattern implementation for consistent data access
# Works with either storage adapter through the same contract
# ==============================================================================

from __future__ import annotations

import logging
from typing import (
    Any,
    ClassVar,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
    Union,
)

from pydantic import BaseModel
from sqlalchemy import Table

from scaffold_db.database.adapters.base_adapter import BaseDatabaseAdapter, Record
from scaffold_db.database.factory import DatabaseFactory
from scaffold_db.domain_models.base import BaseEntity
from scaffold_db.schemas.base import (
    FilterOptions,
    OrderByInput,
    PaginatedResult,
    PaginationInput,
)

logger = logging.getLogger(__name__)

# Type variable for the entity a repository returns
EntityType = TypeVar("EntityType", bound=BaseEntity)

# Accepted write payloads: a mapping in either naming convention or a model
WriteData = Union[Mapping[str, Any], BaseModel]


class BaseRepository(Generic[EntityType]):
    """
    Base repository providing standard CRUD operations.

    Implements the Repository Pattern for data access abstraction,
    decoupling business logic from the active storage backend. Each
    public method is a thin delegation to the matching adapter method
    for ``table``; subclasses add domain finders built on these.

    Generic Parameters:
        EntityType: Domain entity returned by this repository

    Class Attributes:
        entity_class: Pydantic entity built from stored records
        table: Table definition; its name is the adapter collection

    Attributes:
        _adapter: Storage adapter for database operations
        _schema_ready: Set once ``ensure_schema`` has run

    Example:
        >>> class UserRepository(BaseRepository[User]):
        ...     entity_class = User
        ...     table = users
        ...
        >>> repo = UserRepository(adapter)
        >>> user = await repo.create({"email": "test@example.com", ...})
    """

    entity_class: ClassVar[Type[BaseEntity]]
    table: ClassVar[Table]

    def __init__(self, adapter: Optional[BaseDatabaseAdapter] = None) -> None:
        """
        Initialize repository.

        Args:
            adapter: Storage adapter (defaults to the factory's active adapter)
        """
        self._adapter = adapter or DatabaseFactory.get_adapter()
        self._schema_ready = False

    @property
    def adapter(self) -> BaseDatabaseAdapter:
        return self._adapter

    @property
    def collection(self) -> str:
        return self.table.name

    async def ensure_schema(self) -> None:
        """Make sure the table exists. Runs once per repository instance."""
        if self._schema_ready:
            return
        await self._adapter.ensure_schema(self.table)
        self._schema_ready = True

    # ==========================================================================
    # CONVERSION
    # ==========================================================================

    def _to_entity(self, record: Record) -> EntityType:
        """Convert a stored record to the domain entity."""
        return self.entity_class.model_validate(record)

    @staticmethod
    def _to_data(data: WriteData) -> Dict[str, Any]:
        """
        Convert write input to a plain dictionary.

        Pydantic models contribute only the fields that were set.
        """
        if isinstance(data, BaseModel):
            return data.model_dump(by_alias=True, exclude_unset=True)
        return dict(data)

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(self, data: WriteData) -> EntityType:
        """
        Create a new entity.

        Returns:
            Created entity with generated ID and timestamps
        """
        await self.ensure_schema()
        record = await self._adapter.create(self.collection, self._to_data(data))
        return self._to_entity(record)

    async def find_by_id(self, id: str) -> Optional[EntityType]:
        """Live entity by ID, or None."""
        await self.ensure_schema()
        record = await self._adapter.find_by_id(self.collection, id)
        return self._to_entity(record) if record else None

    async def find_many(
        self,
        filters: Optional[FilterOptions] = None,
        order_by: OrderByInput = None,
        pagination: PaginationInput = None,
    ) -> List[EntityType]:
        """
        Live entities matching the filters.

        Args:
            filters: Field-value equality pairs
            order_by: Sort key (newest first when omitted)
            pagination: Page window (all rows when omitted)
        """
        await self.ensure_schema()
        records = await self._adapter.find_many(
            self.collection, filters, order_by, pagination
        )
        return [self._to_entity(record) for record in records]

    async def find_with_pagination(
        self,
        filters: Optional[FilterOptions] = None,
        order_by: OrderByInput = None,
        pagination: PaginationInput = None,
    ) -> PaginatedResult[EntityType]:
        """One page of live entities with pagination metadata."""
        await self.ensure_schema()
        page = await self._adapter.find_with_pagination(
            self.collection, filters, order_by, pagination
        )
        return PaginatedResult[self.entity_class](
            data=[self._to_entity(record) for record in page.data],
            pagination=page.pagination,
        )

    async def update(self, id: str, data: WriteData) -> EntityType:
        """
        Update a live entity.

        Raises:
            DatabaseNotFoundError: If no live entity has this ID
        """
        await self.ensure_schema()
        record = await self._adapter.update(self.collection, id, self._to_data(data))
        return self._to_entity(record)

    async def soft_delete(self, id: str) -> None:
        """
        Mark an entity deleted; it disappears from every read.

        Raises:
            DatabaseNotFoundError: If no live entity has this ID
        """
        await self.ensure_schema()
        await self._adapter.soft_delete(self.collection, id)

    async def hard_delete(self, id: str) -> None:
        """
        Permanently remove an entity.

        Raises:
            DatabaseNotFoundError: If no entity has this ID
        """
        await self.ensure_schema()
        await self._adapter.hard_delete(self.collection, id)

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(self, filters: Optional[FilterOptions] = None) -> int:
        """Count live entities matching filters."""
        await self.ensure_schema()
        return await self._adapter.count(self.collection, filters)

    async def exists(self, filters: Optional[FilterOptions] = None) -> bool:
        """Check if any live entity matches filters."""
        return await self.count(filters) > 0

    async def find_first(
        self,
        filters: Optional[FilterOptions] = None,
    ) -> Optional[EntityType]:
        """First live entity matching filters (lowest ID), or None."""
        await self.ensure_schema()
        record = await self._adapter.find_first(self.collection, filters)
        return self._to_entity(record) if record else None
