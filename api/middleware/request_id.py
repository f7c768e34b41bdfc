"""
Request ID 中间件
用于生成或透传追踪ID与渠道令牌，并通过contextvars传递给日志系统
"""
import uuid
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

import structlog


# 按优先级排列；商店前端沿用 vendure-token
CHANNEL_TOKEN_HEADERS = ("vendure-token", "X-Channel-Token")


def get_channel_token(request: Request) -> Optional[str]:
    """从请求头读取渠道令牌（未携带则返回None）"""
    for header in CHANNEL_TOKEN_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return None


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Request ID 追踪中间件

    功能：
    1. 从请求头获取或生成新的request_id
    2. 将request_id与渠道令牌绑定到structlog上下文
    3. 在响应头中返回request_id
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        channel_token = get_channel_token(request)
        if channel_token:
            structlog.contextvars.bind_contextvars(channel_token=channel_token)

        response = await call_next(request)
        response.headers[self.HEADER_NAME] = request_id
        return response
