# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================

"""
Schemas Module
==============

Option types shared by every read operation and the pagination envelope.
"""

from scaffold_db.schemas.base import (
    BaseSchema,
    FilterOptions,
    OrderByOptions,
    PaginationOptions,
    PaginationMeta,
    PaginatedResult,
    coerce_order_by,
    coerce_pagination,
)

__all__ = [
    "BaseSchema",
    "FilterOptions",
    "OrderByOptions",
    "PaginationOptions",
    "PaginationMeta",
    "PaginatedResult",
    "coerce_order_by",
    "coerce_pagination",
]
