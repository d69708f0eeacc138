# ==============================================================================
# DOMAIN MODELS PACKAGE INITIALIZATION
# ==============================================================================

"""
Domain Models
=============

Pydantic entities returned by the repositories:
- BaseEntity: id, timestamps, soft-delete marker
- User, Payment, Subscription, WebhookEvent
"""

from scaffold_db.domain_models.base import BaseEntity, JsonValue
from scaffold_db.domain_models.user import User, UserRole, UserStatus
from scaffold_db.domain_models.payment import Payment, PaymentStatus
from scaffold_db.domain_models.subscription import (
    Subscription,
    SubscriptionStatus,
)
from scaffold_db.domain_models.webhook_event import WebhookEvent

__all__ = [
    "BaseEntity",
    "JsonValue",
    "User",
    "UserRole",
    "UserStatus",
    "Payment",
    "PaymentStatus",
    "Subscription",
    "SubscriptionStatus",
    "WebhookEvent",
]
