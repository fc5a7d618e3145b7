"""Time source for URL shortener."""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time, timezone-aware in UTC."""
    return datetime.now(timezone.utc)
