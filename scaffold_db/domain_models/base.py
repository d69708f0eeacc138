# ==============================================================================
# BASE ENTITY - Shared Shape of a Persisted Record
# ==============================================================================
# Identifier, creation/update timestamps and the optional soft-delete marker
# ==============================================================================

from __future__ import annotations

import json
from datetime import datetime
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from scaffold_db.utils.case_conversion import snake_to_camel


def _parse_json(value: Any) -> Any:
    """SQLite hands JSON columns back as text; decode them."""
    if isinstance(value, (str, bytes)):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


# JSON document column (metadata, payload)
JsonValue = Annotated[Any, BeforeValidator(_parse_json)]


class BaseEntity(BaseModel):
    """
    Base class for all persisted entities.

    Provides a common foundation with:
    - Opaque string identifier assigned at creation
    - ``created_at`` set once, ``updated_at`` refreshed on every mutation
    - ``deleted_at`` soft-delete marker (None while the record is live)

    Attributes are snake_case; ``model_dump(by_alias=True)`` yields the
    camelCase shape used at the adapter boundary.

    Example:
        >>> class Note(BaseEntity):
        ...     body: str
        >>> Note.model_validate({"id": "1", "body": "hi",
        ...     "createdAt": "2024-01-01T00:00:00+00:00",
        ...     "updatedAt": "2024-01-01T00:00:00+00:00"}).is_deleted
        False
    """

    model_config = ConfigDict(
        alias_generator=snake_to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

    id: str = Field(..., description="Opaque unique identifier")
    created_at: datetime = Field(..., description="Record creation timestamp")
    updated_at: datetime = Field(..., description="Last mutation timestamp")
    deleted_at: Optional[datetime] = Field(
        None,
        description="Soft-delete timestamp (None if live)"
    )

    @property
    def is_deleted(self) -> bool:
        """Check if record is soft-deleted."""
        return self.deleted_at is not None

    def to_record(self) -> Dict[str, Any]:
        """camelCase dictionary of all fields, JSON-compatible values."""
        return self.model_dump(by_alias=True, mode="json")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
