from types import SimpleNamespace

import pytest

stripe = pytest.importorskip("stripe")

from domain.common.exceptions import PaymentProviderError
from infrastructure.external.payments.stripe_client import StripeClient


class _Recorder:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.params = []

    async def __call__(self, params):
        self.params.append(params)
        if self.error is not None:
            raise self.error
        return self.result


def _client_with(**services) -> StripeClient:
    client = StripeClient("sk_test_123")
    client._client = SimpleNamespace(v1=SimpleNamespace(**services))
    return client


@pytest.mark.asyncio
async def test_create_payment_intent_stringifies_metadata_and_omits_empty_customer():
    create = _Recorder(result=SimpleNamespace(
        id="pi_1", client_secret="pi_1_secret", amount=1999, currency="usd", status="requires_payment_method",
    ))
    client = _client_with(payment_intents=SimpleNamespace(create_async=create))

    intent = await client.create_payment_intent(
        amount=1999,
        currency="usd",
        customer=None,
        automatic_payment_methods={"enabled": True},
        metadata={"channelToken": "ch", "orderId": 1, "orderCode": "T_1"},
    )

    assert intent.intent_id == "pi_1"
    assert intent.client_secret == "pi_1_secret"
    params = create.params[0]
    assert "customer" not in params
    assert params["metadata"] == {"channelToken": "ch", "orderId": "1", "orderCode": "T_1"}
    assert params["automatic_payment_methods"] == {"enabled": True}


@pytest.mark.asyncio
async def test_create_payment_intent_passes_customer():
    create = _Recorder(result=SimpleNamespace(
        id="pi_2", client_secret=None, amount=1000, currency="jpy", status="requires_payment_method",
    ))
    client = _client_with(payment_intents=SimpleNamespace(create_async=create))

    intent = await client.create_payment_intent(
        amount=1000, currency="jpy", customer="cus_1",
        automatic_payment_methods={"enabled": True}, metadata={},
    )

    assert create.params[0]["customer"] == "cus_1"
    assert intent.client_secret is None


@pytest.mark.asyncio
async def test_refund_stripe_error_maps_to_provider_error():
    error = stripe.InvalidRequestError(
        "No such payment_intent: 'pi_missing'",
        "payment_intent",
        code="resource_missing",
        http_status=404,
    )
    client = _client_with(refunds=SimpleNamespace(create_async=_Recorder(error=error)))

    with pytest.raises(PaymentProviderError) as info:
        await client.create_refund("pi_missing", 100)

    assert info.value.provider_code == "resource_missing"
    assert info.value.details["http_status"] == 404
    assert "No such payment_intent" in info.value.message


@pytest.mark.asyncio
async def test_refund_success_maps_fields():
    create = _Recorder(result=SimpleNamespace(id="re_1", status="succeeded", amount=100, currency="usd"))
    client = _client_with(refunds=SimpleNamespace(create_async=create))

    refund = await client.create_refund("pi_1", 100)

    assert create.params[0] == {"payment_intent": "pi_1", "amount": 100}
    assert refund.refund_id == "re_1"
    assert refund.payment_intent_id == "pi_1"


@pytest.mark.asyncio
async def test_customer_list_and_create():
    listed = _Recorder(result=SimpleNamespace(data=[
        SimpleNamespace(id="cus_a", email="ada@example.com", name="Ada Lovelace"),
    ]))
    created = _Recorder(result=SimpleNamespace(id="cus_b", email="bob@example.com", name="Bob Smith"))
    client = _client_with(customers=SimpleNamespace(list_async=listed, create_async=created))

    found = await client.list_customers("ada@example.com")
    new = await client.create_customer("bob@example.com", "Bob Smith")

    assert [c.id for c in found] == ["cus_a"]
    assert listed.params[0] == {"email": "ada@example.com"}
    assert new.id == "cus_b"
    assert created.params[0] == {"email": "bob@example.com", "name": "Bob Smith"}
