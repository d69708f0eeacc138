# ==============================================================================
# HELPER UTILITIES
# ==============================================================================
# Common utility functions shared by both storage adapters
# ==============================================================================

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string, the stored timestamp format."""
    return utc_now().isoformat()


def calculate_offset(page: int, limit: int) -> int:
    """Calculate database offset from page number."""
    return (page - 1) * limit


def as_utc(value: datetime) -> datetime:
    """Treat a naive datetime as UTC; aware ones are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def serialize_value(value: Any) -> Any:
    """
    Convert a Python value into its stored representation.

    Datetimes become ISO-8601 strings and enums their value. Everything
    else is returned unchanged.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return as_utc(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value
