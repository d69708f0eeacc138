# ==============================================================================
# WEBHOOK EVENT MODEL - Inbound Payment-Processor Events
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Optional

from scaffold_db.domain_models.base import BaseEntity, JsonValue


class WebhookEvent(BaseEntity):
    """
    Received webhook event and its processing state.

    ``retry_count`` is bumped each time processing fails.
    """

    stripe_event_id: str
    event_type: str
    processed: bool = False
    processed_at: Optional[datetime] = None
    payload: JsonValue
    processing_error: Optional[str] = None
    retry_count: int = 0
