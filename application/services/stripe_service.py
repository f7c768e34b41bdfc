"""
Application service bridging orders and customers with Stripe.

Depends only on the StripeGateway port, the unit of work and settings. The
gateway instance is built by the composition root (API dependencies) and
injected here once; this service never touches the stripe SDK directly.
"""
from __future__ import annotations

import asyncio
import weakref
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Optional

from application.dtos.payments import (
    RefundFailed,
    RefundResult,
    RequestContext,
    WebhookEvent,
)
from application.ports.payment_gateway import StripeGateway
from core.logging_config import get_logger
from core.settings import StripePluginSettings
from domain.common.exceptions import PaymentProviderError, PaymentSignatureError
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.order.currency import CurrencyCode
from domain.order.entity import Customer, Order


logger = get_logger(__name__)


def amount_in_minor_units(total_with_tax: int, currency_code: CurrencyCode | str) -> int:
    """Convert a stored order total into the amount Stripe expects.

    Stripe wants the smallest currency unit (1000 for 10 USD) except for
    zero-decimal currencies, where ¥500 is sent as 500. Totals are always
    stored multiplied by 100, so zero-decimal totals are scaled back down.
    """
    if StripeService._currency_has_fraction_part(currency_code):
        return total_with_tax
    return int((Decimal(total_with_tax) / 100).to_integral_value(rounding=ROUND_HALF_UP))


class StripeService:
    def __init__(
        self,
        gateway: StripeGateway,
        uow_factory: Callable[..., AbstractUnitOfWork],
        options: StripePluginSettings,
    ) -> None:
        self.gateway = gateway
        self.options = options
        self._uow_factory = uow_factory
        # Locks are dropped once no resolution for that customer is in flight
        self._customer_locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()

    async def create_payment_intent(self, ctx: RequestContext, order: Order) -> Optional[str]:
        """Create a PaymentIntent for the order and return its client secret."""
        customer_id: Optional[str] = None

        if self.options.store_customers_in_stripe and ctx.active_user_id:
            customer_id = await self._get_stripe_customer_id(ctx, order)

        amount = amount_in_minor_units(order.total_with_tax, order.currency_code)
        currency = str(getattr(order.currency_code, "value", order.currency_code))

        intent = await self.gateway.create_payment_intent(
            amount=amount,
            currency=currency.lower(),
            customer=customer_id,
            automatic_payment_methods={"enabled": True},
            metadata={
                "channelToken": ctx.channel_token,
                "orderId": order.id,
                "orderCode": order.code,
            },
        )
        logger.info(
            "payment_intent_created",
            order_code=order.code,
            intent_id=intent.intent_id,
            amount=amount,
            currency=currency,
        )

        if not intent.client_secret:
            # This should never happen
            logger.warning("payment_intent_missing_client_secret", order_code=order.code)
            return None

        return intent.client_secret

    async def create_refund(self, payment_intent_id: str, amount: int) -> RefundResult:
        """Refund ``amount`` (Stripe minor units) against a PaymentIntent.

        Failures reported by Stripe are returned as RefundFailed so callers can
        branch on the result instead of handling exceptions.
        """
        try:
            return await self.gateway.create_refund(payment_intent_id, amount)
        except PaymentProviderError as exc:
            details = exc.details or {}
            logger.warning(
                "stripe_refund_failed",
                payment_intent_id=payment_intent_id,
                amount=amount,
                error=exc.message,
                provider_code=exc.provider_code,
            )
            return RefundFailed(
                message=exc.message,
                code=exc.provider_code,
                error_type=details.get("error_type"),
                http_status=details.get("http_status"),
                payment_intent_id=payment_intent_id,
            )

    def construct_event_from_payload(self, payload: bytes, signature: Optional[str]) -> WebhookEvent:
        """Verify a raw webhook body against its Stripe-Signature header and parse it."""
        secret = self.options.webhook_signing_secret
        if not secret:
            raise PaymentSignatureError("Missing STRIPE__WEBHOOK_SIGNING_SECRET")
        if not signature:
            raise PaymentSignatureError("Missing Stripe-Signature header")
        return self.gateway.construct_event(
            payload,
            signature,
            secret,
            self.options.webhook_tolerance_seconds,
        )

    async def _get_stripe_customer_id(self, ctx: RequestContext, active_order: Order) -> Optional[str]:
        """
        Returns the stripe_customer_id if the Customer has one. If that's not the case, queries Stripe to check
        if the customer is already registered, in which case it saves the id as stripe_customer_id and returns it.
        Otherwise, creates a new Customer record in Stripe and returns the generated id.
        """
        # The active order handed in by the caller may not have its customer loaded
        async with self._uow_factory(readonly=True) as uow:
            order = await uow.order_repository.get_with_customer(active_order.id)

        if not order or not order.customer:
            # This should never happen
            return None

        customer = order.customer
        if customer.stripe_customer_id:
            return customer.stripe_customer_id

        async with self._customer_lock(customer.id):
            # Another request may have resolved it while we waited for the lock
            async with self._uow_factory(readonly=True) as uow:
                current = await uow.customer_repository.get_by_id(customer.id)
            if current and current.stripe_customer_id:
                return current.stripe_customer_id

            # No transaction stays open across the Stripe round trips
            stripe_customer_id = await self._find_or_create_stripe_customer(ctx, customer)

            async with self._uow_factory() as uow:
                stored = await uow.customer_repository.set_stripe_customer_id(customer.id, stripe_customer_id)

        if stored and stored != stripe_customer_id:
            logger.warning(
                "stripe_customer_id_already_stored",
                customer_id=customer.id,
                stored=stored,
                resolved=stripe_customer_id,
            )
        return stored or stripe_customer_id

    async def _find_or_create_stripe_customer(self, ctx: RequestContext, customer: Customer) -> str:
        stripe_customers = await self.gateway.list_customers(customer.email_address)
        if stripe_customers:
            return stripe_customers[0].id

        new_stripe_customer = await self.gateway.create_customer(
            email=customer.email_address,
            name=customer.full_name,
        )
        logger.info(
            "stripe_customer_created",
            customer_id=customer.id,
            channel_token=ctx.channel_token,
        )
        return new_stripe_customer.id

    def _customer_lock(self, customer_id: int) -> asyncio.Lock:
        lock = self._customer_locks.get(customer_id)
        if lock is None:
            lock = asyncio.Lock()
            self._customer_locks[customer_id] = lock
        return lock

    @staticmethod
    def _currency_has_fraction_part(currency_code: CurrencyCode | str) -> bool:
        if isinstance(currency_code, str) and not isinstance(currency_code, CurrencyCode):
            currency_code = currency_code.strip().upper()
        try:
            return CurrencyCode(currency_code).has_fraction_part
        except ValueError:
            return True
