"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from shortlinks.common.headers import client_ip


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to resolve the originating client address behind proxies."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Store the client address from X-Forwarded-For or the socket peer."""
        request.state.client_ip = client_ip(
            dict(request.headers), request.client.host if request.client else None
        )

        response = await call_next(request)
        return response
