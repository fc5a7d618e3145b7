"""Data models for URL shortener."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional


@dataclass
class LinkRecord:
    """Represents a short code -> URL mapping."""

    shortcode: str
    original_url: str
    created_at: datetime
    expires_at: datetime
    is_active: bool = True

    def is_live(self, now: datetime) -> bool:
        """A link is live while active and not past its expiry."""
        return self.is_active and now <= self.expires_at


@dataclass(frozen=True)
class ClickEvent:
    """One redirect traversal."""

    timestamp: datetime
    ip: str
    user_agent: str


@dataclass
class StatsRecord:
    """Click analytics for one short code."""

    shortcode: str
    original_url: str
    created_at: datetime
    total_clicks: int = 0
    click_details: List[ClickEvent] = field(default_factory=list)
    last_accessed: Optional[datetime] = None

    def snapshot(self) -> "StatsRecord":
        """Copy detached from the live click list."""
        return replace(self, click_details=list(self.click_details))
