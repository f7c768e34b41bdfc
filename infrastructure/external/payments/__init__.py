"""
Factory for the Stripe gateway client.
"""
from __future__ import annotations

from typing import Optional

from application.ports.payment_gateway import StripeGateway
from core.settings import StripePluginSettings, stripe_settings


def get_stripe_gateway(options: Optional[StripePluginSettings] = None) -> StripeGateway:
    from .stripe_client import StripeClient

    opts = options or stripe_settings
    return StripeClient(opts.api_key or "", api_version=opts.api_version)
