"""Validation utilities for URL shortener."""

import ipaddress
import re
from urllib.parse import urlparse
from typing import Any, Tuple

ALLOWED_SCHEMES = ("http", "https", "ftp")

MAX_URL_LENGTH = 2048

_LABEL_RE = re.compile(r"^(?!-)[a-zA-Z0-9-]{1,63}(?<!-)$")
# Alphabetic TLD or its punycode form (xn--p1ai)
_TLD_RE = re.compile(r"^(?:[a-zA-Z]{2,63}|xn--[a-zA-Z0-9-]{1,59})$")


def _is_valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass

    # International domain names are checked in their ASCII (punycode) form
    try:
        host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return False

    labels = host.rstrip(".").split(".")
    if len(labels) < 2:
        return False
    if not _TLD_RE.match(labels[-1]):
        return False
    return all(_LABEL_RE.match(label) for label in labels)


def is_valid_url(url: Any) -> Tuple[bool, str]:
    """Validate a URL.

    The URL must be absolute, carry an explicit protocol and name a host
    that is either an IP address or a dotted domain with a top-level domain.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, "Invalid URL format"

    try:
        result = urlparse(url)
        host = result.hostname
        # Accessing .port raises ValueError on malformed ports
        result.port
    except ValueError:
        return False, "Invalid URL format"

    if result.scheme.lower() not in ALLOWED_SCHEMES:
        return False, "Invalid URL format"

    if not host or not _is_valid_host(host):
        return False, "Invalid URL format"

    return True, ""


def is_valid_validity(validity: Any) -> Tuple[bool, str]:
    """Validate a validity period in minutes.

    Args:
        validity: Number of minutes the short link stays usable

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(validity, bool) or not isinstance(validity, int):
        return False, "Validity must be an integer number of minutes"

    if validity <= 0:
        return False, "Validity must be positive"

    return True, ""
