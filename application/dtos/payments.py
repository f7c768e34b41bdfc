"""
Payment DTOs (Pydantic v2) used at application boundaries.
"""
from __future__ import annotations

from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class RequestContext(BaseModel):
    """Per-request execution context: who is calling and on which channel."""

    channel_token: str
    active_user_id: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class CreatePaymentIntentRequest(BaseModel):
    order_id: int = Field(gt=0)


class StripeCustomer(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None


class PaymentIntentCreated(BaseModel):
    intent_id: str
    client_secret: Optional[str] = None
    amount: int
    currency: str
    customer: Optional[str] = None
    status: Optional[str] = None


class RefundSucceeded(BaseModel):
    refund_id: str
    status: Optional[str] = None
    amount: int
    currency: Optional[str] = None
    payment_intent_id: Optional[str] = None


class RefundFailed(BaseModel):
    """Stripe reported the refund as not possible; returned, never raised."""

    message: str
    code: Optional[str] = None
    error_type: Optional[str] = None
    http_status: Optional[int] = None
    payment_intent_id: Optional[str] = None


RefundResult = Union[RefundSucceeded, RefundFailed]


class WebhookEvent(BaseModel):
    id: str
    type: str
    livemode: bool = False
    created: Optional[int] = None
    data: dict[str, Any]
    # raw body kept for traceability (optional)
    raw_body: Optional[bytes] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def object(self) -> dict[str, Any]:
        return self.data.get("object") or {}
