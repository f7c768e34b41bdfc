"""
Stripe plugin settings using pydantic-settings v2.

Kept apart from core.config.Settings so the payments integration can be
configured (and overridden in tests) on its own. Variables are read with the
``STRIPE__`` prefix, e.g. ``STRIPE__API_KEY``.
"""
from __future__ import annotations

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class StripePluginSettings(BaseSettings):
    api_key: Optional[str] = None
    webhook_signing_secret: Optional[str] = None
    # Find-or-create a Stripe Customer for logged-in shoppers and attach it to intents
    store_customers_in_stripe: bool = False

    # Pin the Stripe API version; None uses the SDK default
    api_version: Optional[str] = None
    webhook_tolerance_seconds: int = Field(default=300, ge=0)
    default_channel_token: str = "__default_channel__"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="STRIPE__",
        case_sensitive=False,
        extra="ignore",
    )


stripe_settings = StripePluginSettings()
