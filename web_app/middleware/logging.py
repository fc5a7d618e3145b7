"""Logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging.

    Runs inside ``ForwardedHeadersMiddleware`` so ``request.state.client_ip`` is set.
    """

    def __init__(self, app, logger: logging.Logger = None):
        """Initialize logging middleware."""
        super().__init__(app)
        self.logger = logger or logging.getLogger("url_shortener.middleware")

    def _log_response(self, request: Request, status_code: int, start_time: float):
        duration_ms = (time.time() - start_time) * 1000
        level = logging.ERROR if status_code >= 400 else logging.INFO
        self.logger.log(
            level,
            f"{request.method} {request.url.path} - {status_code} in {duration_ms:.0f}ms",
            extra={
                "responseStatus": status_code,
                "responseTime": f"{duration_ms:.0f}ms",
            },
        )

    async def dispatch(self, request: Request, call_next: Callable):
        """Log request and response."""
        start_time = time.time()

        # Log request
        client_ip = getattr(request.state, "client_ip", None) or (
            request.client.host if request.client else "unknown"
        )
        self.logger.info(
            f"{request.method} {request.url.path} - Request received",
            extra={"method": request.method, "url": str(request.url.path), "ip": client_ip},
        )

        try:
            response = await call_next(request)
        except Exception:
            # Answered as 500 by the server error handler further out
            self._log_response(request, 500, start_time)
            raise

        self._log_response(request, response.status_code, start_time)
        return response
