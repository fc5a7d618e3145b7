"""Storage layer for URL shortener."""

from .base import LinkStoreBase, ClickRecorderBase
from .memory import InMemoryLinkStore, InMemoryClickRecorder
from .models import LinkRecord, StatsRecord, ClickEvent

__all__ = [
    "LinkStoreBase",
    "ClickRecorderBase",
    "InMemoryLinkStore",
    "InMemoryClickRecorder",
    "LinkRecord",
    "StatsRecord",
    "ClickEvent",
]
