# ==============================================================================
# UTILS PACKAGE INITIALIZATION
# ==============================================================================

"""
Utilities Module
================

Helper functions and utilities:
- camelCase / snake_case key translation
- ID and timestamp generators
- Stored-value serialization
"""

from scaffold_db.utils.case_conversion import (
    camel_to_snake,
    snake_to_camel,
    camel_to_snake_keys,
    snake_to_camel_keys,
)
from scaffold_db.utils.helpers import (
    generate_uuid,
    utc_now,
    utc_now_iso,
    as_utc,
    calculate_offset,
    serialize_value,
)

__all__ = [
    "camel_to_snake",
    "snake_to_camel",
    "camel_to_snake_keys",
    "snake_to_camel_keys",
    "generate_uuid",
    "utc_now",
    "utc_now_iso",
    "as_utc",
    "calculate_offset",
    "serialize_value",
]
