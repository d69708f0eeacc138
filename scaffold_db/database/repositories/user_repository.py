# ==============================================================================
# USER REPOSITORY - User Data Access
# ==============================================================================

from __future__ import annotations

from datetime import timedelta
from typing import List, Optional

from scaffold_db.database.repositories.base_repository import BaseRepository
from scaffold_db.database.tables import users
from scaffold_db.domain_models.user import User, UserRole, UserStatus
from scaffold_db.schemas.base import OrderByOptions, PaginatedResult, PaginationOptions
from scaffold_db.utils.helpers import utc_now


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.

    Adds lookups by the secondary unique keys (email, payment-processor
    customer id) and the role/status/verification finders used by the
    account and mailing flows.
    """

    entity_class = User
    table = users

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.find_first({"email": email})

    async def find_by_stripe_customer_id(self, stripe_customer_id: str) -> Optional[User]:
        return await self.find_first({"stripeCustomerId": stripe_customer_id})

    async def find_users_paginated(
        self,
        page: int = 1,
        limit: int = 10,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
        email_verified: Optional[bool] = None,
    ) -> PaginatedResult[User]:
        """
        Page through users, newest first.

        Filters left as None are not applied.
        """
        return await self.find_with_pagination(
            filters={
                "role": role,
                "status": status,
                "emailVerified": email_verified,
            },
            pagination=PaginationOptions(page=page, limit=limit),
        )

    async def find_by_role(self, role: UserRole) -> List[User]:
        return await self.find_many({"role": role})

    async def find_by_status(self, status: UserStatus) -> List[User]:
        return await self.find_many({"status": status})

    async def count_by_role(self, role: UserRole) -> int:
        return await self.count({"role": role})

    async def count_by_status(self, status: UserStatus) -> int:
        return await self.count({"status": status})

    async def is_email_unique(self, email: str, exclude_id: Optional[str] = None) -> bool:
        """
        Check that no other live user has this email.

        Args:
            email: Address to check
            exclude_id: User allowed to hold the address (the one being edited)
        """
        existing = await self.find_by_email(email)
        return existing is None or existing.id == exclude_id

    async def update_last_login(self, id: str) -> User:
        return await self.update(id, {"lastLogin": utc_now()})

    async def update_email_verification(self, id: str, verified: bool = True) -> User:
        return await self.update(id, {"emailVerified": verified})

    async def update_email_unsubscribed(self, id: str, unsubscribed: bool = True) -> User:
        return await self.update(id, {"emailUnsubscribed": unsubscribed})

    async def find_unverified_users(self, older_than_days: int = 7) -> List[User]:
        """Unverified users created more than ``older_than_days`` ago."""
        cutoff = utc_now() - timedelta(days=older_than_days)
        candidates = await self.find_many({"emailVerified": False})
        return [user for user in candidates if user.created_at < cutoff]

    async def find_email_subscribers(self) -> List[User]:
        """Active, verified users that have not opted out of email."""
        return await self.find_many(
            {
                "status": UserStatus.ACTIVE,
                "emailVerified": True,
                "emailUnsubscribed": False,
            },
            order_by=OrderByOptions(column="createdAt", ascending=True),
        )
