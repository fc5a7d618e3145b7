"""Common utilities for URL shortener."""

from .validators import is_valid_url, is_valid_validity
from .headers import extract_forwarded_headers, build_base_url, client_ip
from .url_builder import build_short_url
from .logging_config import setup_logging
from .clock import utc_now

__all__ = [
    "is_valid_url",
    "is_valid_validity",
    "extract_forwarded_headers",
    "build_base_url",
    "client_ip",
    "build_short_url",
    "setup_logging",
    "utc_now",
]
