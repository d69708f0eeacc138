# ==============================================================================
# TABLE DEFINITIONS - Persisted Layout
# ==============================================================================
# SQLAlchemy Core tables mirroring the entity shapes in snake_case.
# Used by the SQLite adapter to create tables on demand; the hosted
# backend manages its own schema through migrations.
# ==============================================================================

from __future__ import annotations

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)

metadata = MetaData()


def timestamp_columns() -> list:
    """
    Columns shared by every entity table.

    Timestamps are stored as ISO-8601 text so they compare lexically.
    """
    return [
        Column("id", String(36), primary_key=True),
        Column("created_at", Text, nullable=False),
        Column("updated_at", Text, nullable=False),
        Column("deleted_at", Text, nullable=True),
    ]


users = Table(
    "users",
    metadata,
    *timestamp_columns(),
    Column("email", String(255), nullable=False, unique=True),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("password_hash", Text, nullable=False),
    Column("role", String(20), nullable=False, server_default=text("'User'")),
    Column(
        "status",
        String(30),
        nullable=False,
        server_default=text("'PendingVerification'"),
    ),
    Column("email_verified", Boolean, nullable=False, server_default=text("0")),
    Column("email_unsubscribed", Boolean, nullable=False, server_default=text("0")),
    Column("phone", String(30), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("last_login", Text, nullable=True),
    Column("stripe_customer_id", String(255), nullable=True, unique=True),
    Index("idx_users_role", "role"),
    Index("idx_users_status", "status"),
)


payments = Table(
    "payments",
    metadata,
    *timestamp_columns(),
    Column("stripe_payment_intent_id", String(255), nullable=False, unique=True),
    Column(
        "user_id",
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("stripe_customer_id", String(255), nullable=False),
    Column("amount", Integer, nullable=False),
    Column("currency", String(3), nullable=False, server_default=text("'usd'")),
    Column("status", String(30), nullable=False),
    Column("payment_method", String(100), nullable=True),
    Column("description", Text, nullable=True),
    Column("metadata", JSON, nullable=True),
    Column("processed_at", Text, nullable=True),
    Index("idx_payments_user_id", "user_id"),
    Index("idx_payments_status", "status"),
)


subscriptions = Table(
    "subscriptions",
    metadata,
    *timestamp_columns(),
    Column("stripe_subscription_id", String(255), nullable=False, unique=True),
    Column(
        "user_id",
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("stripe_customer_id", String(255), nullable=False),
    Column("product_id", String(255), nullable=False),
    Column("price_id", String(255), nullable=False),
    Column("status", String(30), nullable=False),
    Column("current_period_start", Text, nullable=False),
    Column("current_period_end", Text, nullable=False),
    Column("trial_start", Text, nullable=True),
    Column("trial_end", Text, nullable=True),
    Column(
        "cancel_at_period_end",
        Boolean,
        nullable=False,
        server_default=text("0"),
    ),
    Column("canceled_at", Text, nullable=True),
    Column("quantity", Integer, nullable=False, server_default=text("1")),
    Column("metadata", JSON, nullable=True),
    Index("idx_subscriptions_user_id", "user_id"),
    Index("idx_subscriptions_status", "status"),
)


webhook_events = Table(
    "webhook_events",
    metadata,
    *timestamp_columns(),
    Column("stripe_event_id", String(255), nullable=False, unique=True),
    Column("event_type", String(100), nullable=False),
    Column("processed", Boolean, nullable=False, server_default=text("0")),
    Column("processed_at", Text, nullable=True),
    Column("payload", JSON, nullable=False),
    Column("processing_error", Text, nullable=True),
    Column("retry_count", Integer, nullable=False, server_default=text("0")),
    Index("idx_webhook_events_processed", "processed"),
    Index("idx_webhook_events_event_type", "event_type"),
)
