# ==============================================================================
# QUERY BUILDER PROTOCOLS - Minimal Fluent Interface for the Hosted Backend
# ==============================================================================
# The Supabase adapter only relies on the builder methods listed here, so
# any client exposing them (the real postgrest builders or a test double)
# can sit behind the adapter.
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


class QueryResponse(Protocol):
    """Result of an executed query: rows plus an optional exact count."""

    data: List[Dict[str, Any]]
    count: Optional[int]


class ExecutableQuery(Protocol):
    async def execute(self) -> QueryResponse: ...


class FilterBuilder(Protocol):
    """Equality and null-check predicates."""

    def eq(self, column: str, value: Any) -> "FilterBuilder": ...

    def is_(self, column: str, value: Optional[str]) -> "FilterBuilder": ...


class OrderBuilder(Protocol):
    def order(self, column: str, *, desc: bool = False) -> "OrderBuilder": ...


class RangeBuilder(Protocol):
    """Inclusive row window and row cap."""

    def range(self, start: int, end: int) -> "RangeBuilder": ...

    def limit(self, size: int) -> "RangeBuilder": ...


class SelectQuery(FilterBuilder, OrderBuilder, RangeBuilder, ExecutableQuery, Protocol):
    """A select chain: filter, order, window, then execute."""

    def eq(self, column: str, value: Any) -> "SelectQuery": ...

    def is_(self, column: str, value: Optional[str]) -> "SelectQuery": ...

    def order(self, column: str, *, desc: bool = False) -> "SelectQuery": ...

    def range(self, start: int, end: int) -> "SelectQuery": ...

    def limit(self, size: int) -> "SelectQuery": ...


class MutationQuery(FilterBuilder, ExecutableQuery, Protocol):
    """An update/delete chain: filter, then execute."""

    def eq(self, column: str, value: Any) -> "MutationQuery": ...

    def is_(self, column: str, value: Optional[str]) -> "MutationQuery": ...


class TableQuery(Protocol):
    """Entry points available on ``client.table(name)``."""

    def select(self, *columns: str, count: Any = None, head: Optional[bool] = None) -> SelectQuery: ...

    def insert(self, json: Any) -> ExecutableQuery: ...

    def update(self, json: Dict[str, Any]) -> MutationQuery: ...

    def delete(self) -> MutationQuery: ...


@runtime_checkable
class TableClient(Protocol):
    """Anything that hands out table query builders by name."""

    def table(self, table_name: str) -> TableQuery: ...
