# ==============================================================================
# BASE SCHEMAS - Read Options and Pagination Envelope
# ==============================================================================
# Plain structured parameters accepted by every adapter read operation
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from scaffold_db.utils.case_conversion import snake_to_camel
from scaffold_db.utils.helpers import calculate_offset

# Type variable for generic result types
T = TypeVar("T")

# Field name -> exact-match value. AND-combined with the live-record predicate.
FilterOptions = Dict[str, Any]


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Attributes are snake_case in Python and camelCase when dumped
    with ``by_alias=True``; either name is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=snake_to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OrderByOptions(BaseSchema):
    """Single-key sort."""

    column: str = Field(
        ...,
        min_length=1,
        description="Field to sort by (either naming convention)"
    )
    ascending: bool = Field(
        True,
        description="Sort direction"
    )


class PaginationOptions(BaseSchema):
    """Page-number pagination; offset is derived."""

    page: int = Field(
        1,
        ge=1,
        description="Page number (1-indexed)"
    )
    limit: int = Field(
        10,
        ge=1,
        description="Items per page"
    )

    @property
    def offset(self) -> int:
        return calculate_offset(self.page, self.limit)


class PaginationMeta(BaseSchema):
    """
    Pagination metadata attached to a page of results.

    Attributes:
        page: Current page number (1-indexed)
        limit: Items per page
        total: Total number of matching live records
        has_next: More records exist after this page
        has_previous: This is not the first page
    """

    page: int
    limit: int
    total: int
    has_next: bool
    has_previous: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        offset = calculate_offset(page, limit)
        return cls(
            page=page,
            limit=limit,
            total=total,
            has_next=offset + limit < total,
            has_previous=page > 1,
        )


class PaginatedResult(BaseModel, Generic[T]):
    """
    Generic paginated result wrapper.

    ``{"data": [...], "pagination": {page, limit, total, hasNext, hasPrevious}}``
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: List[T] = Field(
        default_factory=list,
        description="Records on this page"
    )
    pagination: PaginationMeta


OrderByInput = Union[OrderByOptions, Mapping[str, Any], None]
PaginationInput = Union[PaginationOptions, Mapping[str, Any], None]


def coerce_order_by(value: OrderByInput) -> Optional[OrderByOptions]:
    """Accept an OrderByOptions, a plain mapping, or None."""
    if value is None or isinstance(value, OrderByOptions):
        return value
    return OrderByOptions.model_validate(dict(value))


def coerce_pagination(value: PaginationInput) -> Optional[PaginationOptions]:
    """Accept a PaginationOptions, a plain mapping, or None."""
    if value is None or isinstance(value, PaginationOptions):
        return value
    return PaginationOptions.model_validate(dict(value))
