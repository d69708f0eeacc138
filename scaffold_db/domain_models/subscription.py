# ==============================================================================
# SUBSCRIPTION MODEL - Recurring Billing
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from scaffold_db.domain_models.base import BaseEntity, JsonValue


class SubscriptionStatus(str, Enum):
    """Subscription status as reported by the payment processor."""
    ACTIVE = "Active"
    PAST_DUE = "PastDue"
    UNPAID = "Unpaid"
    CANCELED = "Canceled"
    INCOMPLETE = "Incomplete"
    INCOMPLETE_EXPIRED = "IncompleteExpired"
    TRIALING = "Trialing"
    PAUSED = "Paused"


class Subscription(BaseEntity):
    """
    Subscription entity.

    Attributes:
        current_period_start: Start of the billing period in effect
        current_period_end: End of the billing period in effect
        trial_end: End of the trial, if the subscription has one
        cancel_at_period_end: Cancellation scheduled for period end
    """

    stripe_subscription_id: str
    user_id: str
    stripe_customer_id: str
    product_id: str
    price_id: str
    status: SubscriptionStatus
    current_period_start: datetime
    current_period_end: datetime
    trial_start: Optional[datetime] = None
    trial_end: Optional[datetime] = None
    cancel_at_period_end: bool = False
    canceled_at: Optional[datetime] = None
    quantity: int = 1
    metadata: JsonValue = None

    @property
    def is_trialing(self) -> bool:
        return self.status == SubscriptionStatus.TRIALING
