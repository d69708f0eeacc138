# ==============================================================================
# WEBHOOK EVENT REPOSITORY - Webhook Event Data Access
# ==============================================================================

from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Optional

from scaffold_db.core.exceptions import DatabaseNotFoundError
from scaffold_db.database.repositories.base_repository import BaseRepository
from scaffold_db.database.tables import webhook_events
from scaffold_db.domain_models.webhook_event import WebhookEvent
from scaffold_db.schemas.base import OrderByOptions, PaginationOptions
from scaffold_db.utils.helpers import utc_now

logger = logging.getLogger(__name__)

OLDEST_FIRST = OrderByOptions(column="createdAt", ascending=True)


class WebhookEventRepository(BaseRepository[WebhookEvent]):
    """
    Repository for received webhook events.

    Events are deduplicated by ``stripe_event_id``; failures bump
    ``retry_count`` and keep the last error message.
    """

    entity_class = WebhookEvent
    table = webhook_events

    async def find_by_stripe_event_id(self, stripe_event_id: str) -> Optional[WebhookEvent]:
        return await self.find_first({"stripeEventId": stripe_event_id})

    async def find_unprocessed(self, limit: int = 50) -> List[WebhookEvent]:
        """Oldest unprocessed events first."""
        return await self.find_many(
            {"processed": False},
            order_by=OLDEST_FIRST,
            pagination=PaginationOptions(page=1, limit=limit),
        )

    async def find_by_event_type(self, event_type: str, limit: int = 50) -> List[WebhookEvent]:
        return await self.find_many(
            {"eventType": event_type},
            pagination=PaginationOptions(page=1, limit=limit),
        )

    async def mark_as_processed(self, id: str) -> WebhookEvent:
        return await self.update(id, {"processed": True, "processedAt": utc_now()})

    async def mark_as_failed(self, id: str, error: str) -> WebhookEvent:
        """
        Record a processing failure and increment ``retry_count``.

        Raises:
            DatabaseNotFoundError: If no live event has this ID
        """
        event = await self.find_by_id(id)
        if event is None:
            raise DatabaseNotFoundError(
                f"{self.collection} record not found: {id}",
                resource_type=self.collection,
                resource_id=id,
            )
        return await self.update(
            id,
            {"processingError": error, "retryCount": event.retry_count + 1},
        )

    async def find_failed_events(self, max_retries: int = 3) -> List[WebhookEvent]:
        """Unprocessed events with at most ``max_retries`` attempts, oldest first."""
        pending = await self.find_many({"processed": False}, order_by=OLDEST_FIRST)
        return [
            event for event in pending
            if event.retry_count <= max_retries
        ]

    async def cleanup_old_events(self, days_old: int = 30) -> int:
        """
        Permanently remove processed events older than ``days_old`` days.

        Returns:
            Number of events removed
        """
        cutoff = utc_now() - timedelta(days=days_old)
        processed = await self.find_many({"processed": True}, order_by=OLDEST_FIRST)
        removed = 0
        for event in processed:
            if event.created_at >= cutoff:
                break
            await self.hard_delete(event.id)
            removed += 1
        logger.info(f"Removed {removed} processed webhook events older than {days_old} days")
        return removed
