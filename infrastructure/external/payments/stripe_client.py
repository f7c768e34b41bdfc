"""
Stripe adapter using the official stripe-python SDK.

Notes on SDK usage:
- One explicit `stripe.StripeClient` per adapter instance; the module-level
  `stripe.api_key` global is never touched.
- Requests go through the async service methods (`*_async`), which use the
  SDK's default httpx client, timeouts and retry settings.
- Webhook verification uses `StripeClient.construct_event` with the
  `Stripe-Signature` header.
"""
from __future__ import annotations

from typing import Any, Optional

import stripe

from application.dtos.payments import (
    PaymentIntentCreated,
    RefundSucceeded,
    StripeCustomer,
    WebhookEvent,
)
from core.logging_config import get_logger
from domain.common.exceptions import PaymentProviderError, PaymentSignatureError


logger = get_logger(__name__)


def _provider_error(exc: stripe.StripeError) -> PaymentProviderError:
    error = getattr(exc, "error", None)
    return PaymentProviderError(
        getattr(exc, "user_message", None) or str(exc),
        provider_code=getattr(exc, "code", None),
        details={
            "error_type": getattr(error, "type", None) or type(exc).__name__,
            "http_status": getattr(exc, "http_status", None),
            "request_id": getattr(exc, "request_id", None),
        },
    )


class StripeClient:
    provider = "stripe"

    def __init__(self, api_key: str, *, api_version: Optional[str] = None) -> None:
        if not api_key:
            raise RuntimeError("STRIPE__API_KEY not configured")
        self._client = stripe.StripeClient(api_key, stripe_version=api_version)

    async def create_payment_intent(
        self,
        *,
        amount: int,
        currency: str,
        customer: Optional[str],
        automatic_payment_methods: dict[str, Any],
        metadata: dict[str, Any],
    ) -> PaymentIntentCreated:
        params: dict[str, Any] = {
            "amount": amount,
            "currency": currency,
            "automatic_payment_methods": automatic_payment_methods,
            # Stripe metadata values are strings
            "metadata": {k: str(v) for k, v in metadata.items()},
        }
        if customer:
            params["customer"] = customer
        try:
            pi = await self._client.v1.payment_intents.create_async(params=params)
        except stripe.StripeError as exc:
            raise _provider_error(exc) from exc
        return PaymentIntentCreated(
            intent_id=pi.id,
            client_secret=pi.client_secret,
            amount=pi.amount,
            currency=pi.currency,
            customer=customer,
            status=pi.status,
        )

    async def create_refund(self, payment_intent_id: str, amount: int) -> RefundSucceeded:
        try:
            refund = await self._client.v1.refunds.create_async(
                params={"payment_intent": payment_intent_id, "amount": amount}
            )
        except stripe.StripeError as exc:
            raise _provider_error(exc) from exc
        return RefundSucceeded(
            refund_id=refund.id,
            status=refund.status,
            amount=refund.amount,
            currency=refund.currency,
            payment_intent_id=payment_intent_id,
        )

    async def list_customers(self, email: str) -> list[StripeCustomer]:
        try:
            page = await self._client.v1.customers.list_async(params={"email": email})
        except stripe.StripeError as exc:
            raise _provider_error(exc) from exc
        return [StripeCustomer(id=c.id, email=c.email, name=c.name) for c in page.data]

    async def create_customer(self, email: str, name: str) -> StripeCustomer:
        try:
            customer = await self._client.v1.customers.create_async(
                params={"email": email, "name": name}
            )
        except stripe.StripeError as exc:
            raise _provider_error(exc) from exc
        return StripeCustomer(id=customer.id, email=customer.email, name=customer.name)

    def construct_event(
        self,
        payload: bytes,
        signature: str,
        secret: str,
        tolerance: int,
    ) -> WebhookEvent:
        try:
            event = self._client.construct_event(payload, signature, secret, tolerance)
        except stripe.SignatureVerificationError as exc:
            raise PaymentSignatureError(str(exc)) from exc
        except ValueError as exc:
            # Signature matched but the body is not a JSON event
            raise PaymentSignatureError(f"Invalid webhook payload: {exc}") from exc
        return WebhookEvent(
            id=event.id,
            type=event.type,
            livemode=bool(getattr(event, "livemode", False)),
            created=getattr(event, "created", None),
            data=event.data.to_dict(),
            raw_body=payload,
        )
