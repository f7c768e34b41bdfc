"""
Stripe payments API routes.

Keep this thin: no SDK details here. Intent creation returns the client
secret the storefront needs to confirm the payment with Stripe.js; the
webhook endpoint verifies and acknowledges Stripe events.
"""
from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_request_context, get_stripe_service, get_uow_factory
from application.dtos.payments import CreatePaymentIntentRequest, RequestContext
from application.services.stripe_service import StripeService
from core.logging_config import get_logger
from core.response import success_response
from domain.common.exceptions import OrderNotFoundException
from domain.common.unit_of_work import AbstractUnitOfWork


router = APIRouter(prefix="/payments/stripe", tags=["Payments"])
logger = get_logger(__name__)

SIGNATURE_HEADER = "Stripe-Signature"


@router.post("/intents", summary="Create Stripe payment intent")
async def create_payment_intent(
    payload: CreatePaymentIntentRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: StripeService = Depends(get_stripe_service),
    uow_factory: Callable[..., AbstractUnitOfWork] = Depends(get_uow_factory),
):
    async with uow_factory(readonly=True) as uow:
        order = await uow.order_repository.get_by_id(payload.order_id)
    if order is None:
        raise OrderNotFoundException(payload.order_id)

    client_secret = await service.create_payment_intent(ctx, order)
    return success_response(
        data={"order_code": order.code, "client_secret": client_secret},
        message="Payment intent created",
    )


@router.post("/webhook", summary="Stripe webhook")
async def stripe_webhook(request: Request, service: StripeService = Depends(get_stripe_service)):
    raw_body = await request.body()
    event = service.construct_event_from_payload(raw_body, request.headers.get(SIGNATURE_HEADER))

    metadata = event.object.get("metadata") or {}
    logger.info(
        "stripe_webhook_received",
        event_id=event.id,
        event_type=event.type,
        livemode=event.livemode,
        order_code=metadata.get("orderCode"),
        channel_token=metadata.get("channelToken"),
    )
    # Return 200 to acknowledge receipt per Stripe conventions
    return success_response(
        data={"id": event.id, "type": event.type},
        message="Webhook received",
    )
