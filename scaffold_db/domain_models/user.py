# ==============================================================================
# USER MODEL - Authentication and Authorization
# ==============================================================================
# User entity for authentication, profiles, and access control
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from scaffold_db.domain_models.base import BaseEntity


class UserRole(str, Enum):
    """Access-control roles."""
    ADMIN = "Admin"
    USER = "User"
    MODERATOR = "Moderator"


class UserStatus(str, Enum):
    """Account lifecycle status."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    PENDING_VERIFICATION = "PendingVerification"


class User(BaseEntity):
    """
    User entity.

    Attributes:
        email: Unique email address (login identifier)
        password_hash: Hashed password
        role: Access-control role
        status: Account lifecycle status
        email_verified: Email ownership confirmed
        email_unsubscribed: Opted out of marketing email
        stripe_customer_id: Linked payment-processor customer
    """

    email: str
    first_name: str
    last_name: str
    password_hash: str
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.PENDING_VERIFICATION
    email_verified: bool = False
    email_unsubscribed: bool = False
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    last_login: Optional[datetime] = None
    stripe_customer_id: Optional[str] = Field(
        None,
        description="Payment-processor customer id"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_email_verified(self) -> bool:
        return self.email_verified

    @property
    def is_suspended(self) -> bool:
        return self.status == UserStatus.SUSPENDED

    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_moderator(self) -> bool:
        return self.role == UserRole.MODERATOR

    def has_role(self, role: UserRole) -> bool:
        return self.role == role

    def has_any_role(self, *roles: UserRole) -> bool:
        return self.role in roles

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
