"""
API依赖项 - 组装 Stripe 服务与请求上下文
"""
from functools import lru_cache
from typing import Callable

from fastapi import Request

from api.middleware import get_channel_token
from application.dtos.payments import RequestContext
from application.services.stripe_service import StripeService
from core.settings import stripe_settings
from domain.common.unit_of_work import AbstractUnitOfWork
from infrastructure.external.payments import get_stripe_gateway
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[..., AbstractUnitOfWork]:
    return SQLAlchemyUnitOfWork


@lru_cache
def get_stripe_service() -> StripeService:
    """进程内单例：Stripe 客户端与按客户的锁只构建一次"""
    return StripeService(
        gateway=get_stripe_gateway(stripe_settings),
        uow_factory=get_uow_factory(),
        options=stripe_settings,
    )


async def get_request_context(request: Request) -> RequestContext:
    """从请求构建上下文；active user 由上游认证层写入 request.state.user_id"""
    channel_token = get_channel_token(request) or stripe_settings.default_channel_token
    return RequestContext(
        channel_token=channel_token,
        active_user_id=getattr(request.state, "user_id", None),
    )
