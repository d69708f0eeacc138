# ==============================================================================
# SUBSCRIPTION REPOSITORY - Subscription Data Access
# ==============================================================================

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from scaffold_db.database.repositories.base_repository import BaseRepository
from scaffold_db.database.tables import subscriptions
from scaffold_db.domain_models.subscription import Subscription, SubscriptionStatus
from scaffold_db.schemas.base import PaginationOptions
from scaffold_db.utils.helpers import utc_now


class SubscriptionRepository(BaseRepository[Subscription]):
    """
    Repository for recurring subscriptions.

    The trial and renewal finders narrow a live status query by date in
    Python; both windows are ``(now, now + days]``.
    """

    entity_class = Subscription
    table = subscriptions

    async def find_by_stripe_subscription_id(
        self,
        stripe_subscription_id: str,
    ) -> Optional[Subscription]:
        return await self.find_first(
            {"stripeSubscriptionId": stripe_subscription_id}
        )

    async def find_by_user_id(self, user_id: str) -> List[Subscription]:
        return await self.find_many({"userId": user_id})

    async def find_active_by_user_id(self, user_id: str) -> Optional[Subscription]:
        """The user's most recent active subscription."""
        matches = await self.find_many(
            {"userId": user_id, "status": SubscriptionStatus.ACTIVE},
            pagination=PaginationOptions(page=1, limit=1),
        )
        return matches[0] if matches else None

    async def find_by_status(
        self,
        status: SubscriptionStatus,
        limit: int = 50,
    ) -> List[Subscription]:
        return await self.find_many(
            {"status": status},
            pagination=PaginationOptions(page=1, limit=limit),
        )

    async def update_status(
        self,
        id: str,
        status: SubscriptionStatus,
        canceled_at: Optional[datetime] = None,
    ) -> Subscription:
        """
        Set the status; ``canceled_at`` is recorded only for cancellations.

        Raises:
            DatabaseNotFoundError: If no live subscription has this ID
        """
        data: Dict[str, Any] = {"status": status}
        if canceled_at is not None and status == SubscriptionStatus.CANCELED:
            data["canceledAt"] = canceled_at
        return await self.update(id, data)

    async def find_expiring_trials(self, days_from_now: int = 3) -> List[Subscription]:
        now = utc_now()
        horizon = now + timedelta(days=days_from_now)
        trialing = await self.find_many({"status": SubscriptionStatus.TRIALING})
        return [
            sub for sub in trialing
            if sub.trial_end is not None and now < sub.trial_end <= horizon
        ]

    async def find_upcoming_renewals(self, days_from_now: int = 3) -> List[Subscription]:
        now = utc_now()
        horizon = now + timedelta(days=days_from_now)
        active = await self.find_many(
            {"status": SubscriptionStatus.ACTIVE, "cancelAtPeriodEnd": False}
        )
        return [sub for sub in active if now < sub.current_period_end <= horizon]
