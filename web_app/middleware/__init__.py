"""Request middleware: forwarded-header parsing and request/response logging."""

from .headers import ForwardedHeadersMiddleware
from .logging import LoggingMiddleware

__all__ = ["ForwardedHeadersMiddleware", "LoggingMiddleware"]
