# ==============================================================================
# REPOSITORIES PACKAGE INITIALIZATION
# ==============================================================================

"""
Repository Pattern Implementation
=================================

Provides data access abstraction through the Repository Pattern:
- BaseRepository: Generic repository over one adapter and one table
- Domain-specific repositories for each entity
"""

from scaffold_db.database.repositories.base_repository import BaseRepository
from scaffold_db.database.repositories.payment_repository import PaymentRepository
from scaffold_db.database.repositories.subscription_repository import (
    SubscriptionRepository,
)
from scaffold_db.database.repositories.user_repository import UserRepository
from scaffold_db.database.repositories.webhook_event_repository import (
    WebhookEventRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PaymentRepository",
    "SubscriptionRepository",
    "WebhookEventRepository",
]
