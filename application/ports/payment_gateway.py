"""
Stripe gateway port (application/ports) exposing a replaceable protocol.

The application service depends on this Protocol; infrastructure implements
it on top of the stripe SDK. Implementations raise PaymentProviderError for
gateway failures and PaymentSignatureError for webhook verification failures.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from application.dtos.payments import (
    PaymentIntentCreated,
    RefundSucceeded,
    StripeCustomer,
    WebhookEvent,
)


@runtime_checkable
class StripeGateway(Protocol):
    """Capabilities of the Stripe API used by the payments integration."""

    async def create_payment_intent(
        self,
        *,
        amount: int,
        currency: str,
        customer: Optional[str],
        automatic_payment_methods: dict[str, Any],
        metadata: dict[str, Any],
    ) -> PaymentIntentCreated: ...

    async def create_refund(self, payment_intent_id: str, amount: int) -> RefundSucceeded: ...

    async def list_customers(self, email: str) -> list[StripeCustomer]: ...

    async def create_customer(self, email: str, name: str) -> StripeCustomer: ...

    def construct_event(
        self,
        payload: bytes,
        signature: str,
        secret: str,
        tolerance: int,
    ) -> WebhookEvent: ...
