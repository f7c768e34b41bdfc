from .request_id import RequestIDMiddleware, get_channel_token

__all__ = [
    "RequestIDMiddleware",
    "get_channel_token",
]
