"""Pytest bootstrap configuration.

Environment variables are set before any application module is imported so
settings pick up a throwaway database and Stripe test credentials. Shared
fakes for the Stripe gateway port and the unit of work live here.
"""
import os

os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("STRIPE__API_KEY", "sk_test_123")
os.environ.setdefault("STRIPE__WEBHOOK_SIGNING_SECRET", "whsec_test")

import hashlib
import hmac
import time
from typing import Any, Optional

import pytest

from application.dtos.payments import (
    PaymentIntentCreated,
    RefundSucceeded,
    StripeCustomer,
    WebhookEvent,
)
from core.settings import StripePluginSettings
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.order.currency import CurrencyCode
from domain.order.entity import Customer, Order
from domain.order.repository import CustomerRepository, OrderRepository


WEBHOOK_SECRET = "whsec_test"


def sign_payload(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    """Build a Stripe-Signature header value the way Stripe signs webhooks."""
    ts = timestamp if timestamp is not None else int(time.time())
    signed = f"{ts}.".encode() + payload
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


class StubGateway:
    """In-memory StripeGateway recording every call."""

    def __init__(
        self,
        *,
        client_secret: Optional[str] = "pi_1_secret_abc",
        existing_customers: Optional[list[StripeCustomer]] = None,
        refund_error: Optional[Exception] = None,
    ) -> None:
        self.client_secret = client_secret
        self.existing_customers = existing_customers or []
        self.refund_error = refund_error
        self.intent_calls: list[dict[str, Any]] = []
        self.list_calls: list[str] = []
        self.create_customer_calls: list[dict[str, str]] = []
        self.refund_calls: list[tuple[str, int]] = []

    async def create_payment_intent(self, **kwargs) -> PaymentIntentCreated:
        self.intent_calls.append(kwargs)
        return PaymentIntentCreated(
            intent_id="pi_1",
            client_secret=self.client_secret,
            amount=kwargs["amount"],
            currency=kwargs["currency"],
            customer=kwargs.get("customer"),
            status="requires_payment_method",
        )

    async def create_refund(self, payment_intent_id: str, amount: int) -> RefundSucceeded:
        self.refund_calls.append((payment_intent_id, amount))
        if self.refund_error is not None:
            raise self.refund_error
        return RefundSucceeded(
            refund_id="re_1",
            status="succeeded",
            amount=amount,
            currency="usd",
            payment_intent_id=payment_intent_id,
        )

    async def list_customers(self, email: str) -> list[StripeCustomer]:
        self.list_calls.append(email)
        return [c for c in self.existing_customers if c.email == email]

    async def create_customer(self, email: str, name: str) -> StripeCustomer:
        self.create_customer_calls.append({"email": email, "name": name})
        return StripeCustomer(id=f"cus_new_{len(self.create_customer_calls)}", email=email, name=name)

    def construct_event(self, payload: bytes, signature: str, secret: str, tolerance: int) -> WebhookEvent:
        return WebhookEvent(id="evt_stub", type="stub.event", data={"object": {}}, raw_body=payload)


class InMemoryStore:
    def __init__(self) -> None:
        self.orders: dict[int, Order] = {}
        self.customers: dict[int, Customer] = {}
        self.writes: list[tuple[int, str]] = []
        self.open_units = 0

    def add_order(self, order: Order, customer: Optional[Customer] = None) -> Order:
        if customer is not None:
            self.customers[customer.id] = customer
            order.customer_id = customer.id
        self.orders[order.id] = order
        return order


class InMemoryOrderRepository(OrderRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        order = self.store.orders.get(order_id)
        if order is None:
            return None
        return Order(
            id=order.id,
            code=order.code,
            currency_code=order.currency_code,
            total_with_tax=order.total_with_tax,
            customer_id=order.customer_id,
        )

    async def get_with_customer(self, order_id: int) -> Optional[Order]:
        order = await self.get_by_id(order_id)
        if order is not None and order.customer_id is not None:
            stored = self.store.customers.get(order.customer_id)
            if stored is not None:
                order.customer = Customer(**vars(stored))
        return order


class InMemoryCustomerRepository(CustomerRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        stored = self.store.customers.get(customer_id)
        return Customer(**vars(stored)) if stored else None

    async def set_stripe_customer_id(self, customer_id: int, stripe_customer_id: str) -> Optional[str]:
        stored = self.store.customers.get(customer_id)
        if stored is None:
            return None
        if stored.stripe_customer_id is None:
            stored.stripe_customer_id = stripe_customer_id
            self.store.writes.append((customer_id, stripe_customer_id))
        return stored.stripe_customer_id


class InMemoryUnitOfWork(AbstractUnitOfWork):
    def __init__(self, store: InMemoryStore, *, readonly: bool = False) -> None:
        super().__init__(readonly=readonly)
        self.store = store
        self.order_repository = InMemoryOrderRepository(store)
        self.customer_repository = InMemoryCustomerRepository(store)

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        self.store.open_units += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.store.open_units -= 1
        await super().__aexit__(exc_type, exc, tb)

    async def commit(self) -> None:
        self._committed = True

    async def rollback(self) -> None:
        self._committed = False


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow_factory(store):
    def factory(*, readonly: bool = False) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(store, readonly=readonly)
    return factory


@pytest.fixture
def stripe_options() -> StripePluginSettings:
    return StripePluginSettings(
        api_key="sk_test_123",
        webhook_signing_secret=WEBHOOK_SECRET,
        store_customers_in_stripe=True,
    )


@pytest.fixture
def usd_order(store) -> Order:
    customer = Customer(id=7, email_address="ada@example.com", first_name="Ada", last_name="Lovelace")
    return store.add_order(
        Order(id=1, code="T_1001", currency_code=CurrencyCode.USD, total_with_tax=1999),
        customer,
    )
