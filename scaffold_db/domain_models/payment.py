# ==============================================================================
# PAYMENT MODEL - One-off Charges
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from scaffold_db.domain_models.base import BaseEntity, JsonValue


class PaymentStatus(str, Enum):
    """Payment-intent status as reported by the payment processor."""
    REQUIRES_PAYMENT_METHOD = "RequiresPaymentMethod"
    REQUIRES_CONFIRMATION = "RequiresConfirmation"
    REQUIRES_ACTION = "RequiresAction"
    PROCESSING = "Processing"
    REQUIRES_CAPTURE = "RequiresCapture"
    CANCELED = "Canceled"
    SUCCEEDED = "Succeeded"


class Payment(BaseEntity):
    """
    Payment entity.

    ``amount`` is in the currency's minor unit (cents for usd).
    """

    stripe_payment_intent_id: str
    user_id: str
    stripe_customer_id: str
    amount: int = Field(..., ge=0)
    currency: str = "usd"
    status: PaymentStatus
    payment_method: Optional[str] = None
    description: Optional[str] = None
    metadata: JsonValue = None
    processed_at: Optional[datetime] = None
