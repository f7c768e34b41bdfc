import json
import time

import pytest

from application.services.stripe_service import StripeService
from domain.common.exceptions import PaymentSignatureError
from infrastructure.external.payments import get_stripe_gateway
from infrastructure.external.payments.stripe_client import StripeClient

from conftest import WEBHOOK_SECRET, sign_payload


EVENT = {
    "id": "evt_1",
    "object": "event",
    "type": "payment_intent.succeeded",
    "livemode": False,
    "created": 1700000000,
    "api_version": "2020-08-27",
    "data": {
        "object": {
            "id": "pi_1",
            "object": "payment_intent",
            "amount": 1999,
            "currency": "usd",
            "metadata": {"channelToken": "ch_token", "orderId": "1", "orderCode": "T_1001"},
        }
    },
}


@pytest.fixture
def payload() -> bytes:
    return json.dumps(EVENT).encode()


@pytest.fixture
def service(uow_factory, stripe_options) -> StripeService:
    return StripeService(gateway=get_stripe_gateway(stripe_options), uow_factory=uow_factory, options=stripe_options)


def test_factory_builds_stripe_client(stripe_options):
    assert isinstance(get_stripe_gateway(stripe_options), StripeClient)


def test_factory_requires_api_key(stripe_options):
    stripe_options.api_key = None
    with pytest.raises(RuntimeError):
        get_stripe_gateway(stripe_options)


def test_valid_signature_parses_event(service, payload):
    event = service.construct_event_from_payload(payload, sign_payload(payload))

    assert event.id == "evt_1"
    assert event.type == "payment_intent.succeeded"
    assert event.livemode is False
    assert event.created == 1700000000
    assert event.object["id"] == "pi_1"
    assert event.object["metadata"]["orderCode"] == "T_1001"
    assert event.raw_body == payload


def test_tampered_payload_is_rejected(service, payload):
    signature = sign_payload(payload)
    tampered = payload.replace(b"1999", b"1")

    with pytest.raises(PaymentSignatureError):
        service.construct_event_from_payload(tampered, signature)


def test_wrong_secret_is_rejected(service, payload):
    with pytest.raises(PaymentSignatureError):
        service.construct_event_from_payload(payload, sign_payload(payload, secret="whsec_other"))


def test_stale_timestamp_is_rejected(service, payload):
    signature = sign_payload(payload, timestamp=int(time.time()) - 3600)
    with pytest.raises(PaymentSignatureError):
        service.construct_event_from_payload(payload, signature)


def test_malformed_signature_header_is_rejected(service, payload):
    with pytest.raises(PaymentSignatureError):
        service.construct_event_from_payload(payload, "not-a-signature")


def test_signed_non_json_body_is_rejected(service):
    body = b"not json"
    with pytest.raises(PaymentSignatureError):
        service.construct_event_from_payload(body, sign_payload(body, secret=WEBHOOK_SECRET))
