# ==============================================================================
# PAYMENT REPOSITORY - Payment Data Access
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from scaffold_db.database.repositories.base_repository import BaseRepository
from scaffold_db.database.tables import payments
from scaffold_db.domain_models.payment import Payment, PaymentStatus
from scaffold_db.schemas.base import PaginationOptions
from scaffold_db.utils.helpers import as_utc


class PaymentRepository(BaseRepository[Payment]):
    """Repository for one-off payments."""

    entity_class = Payment
    table = payments

    async def find_by_stripe_payment_intent_id(
        self,
        stripe_payment_intent_id: str,
    ) -> Optional[Payment]:
        return await self.find_first(
            {"stripePaymentIntentId": stripe_payment_intent_id}
        )

    async def find_by_user_id(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> List[Payment]:
        """A user's payments, newest first, optionally capped at ``limit``."""
        pagination = PaginationOptions(page=1, limit=limit) if limit is not None else None
        return await self.find_many({"userId": user_id}, pagination=pagination)

    async def find_by_filter(
        self,
        user_id: Optional[str] = None,
        stripe_customer_id: Optional[str] = None,
        status: Optional[PaymentStatus] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Payment]:
        """
        Payments matching every given criterion, newest first.

        The creation-date window is inclusive on both ends; naive bounds
        are taken as UTC.
        """
        filters: Dict[str, Any] = {
            "userId": user_id,
            "stripeCustomerId": stripe_customer_id,
            "status": status,
        }
        matches = await self.find_many(filters)
        if start_date is not None:
            start = as_utc(start_date)
            matches = [p for p in matches if p.created_at >= start]
        if end_date is not None:
            end = as_utc(end_date)
            matches = [p for p in matches if p.created_at <= end]
        return matches[offset:offset + limit]

    async def update_status(
        self,
        id: str,
        status: PaymentStatus,
        processed_at: Optional[datetime] = None,
    ) -> Payment:
        data: Dict[str, Any] = {"status": status}
        if processed_at is not None:
            data["processedAt"] = processed_at
        return await self.update(id, data)

    async def get_total_amount_by_user(
        self,
        user_id: str,
        status: Optional[PaymentStatus] = None,
    ) -> int:
        """Sum of a user's live payment amounts, optionally for one status."""
        matches = await self.find_many({"userId": user_id, "status": status})
        return sum(payment.amount for payment in matches)
