"""Click analytics aggregation.

Everything here is a pure function of the records it is handed and an
explicit ``now``; nothing is cached between calls.
"""

from collections import Counter
from datetime import datetime, timedelta, tzinfo
from typing import Any, Dict, Iterable, Optional, Union

from .storage.models import LinkRecord, StatsRecord

RECENT_ACTIVITY_LIMIT = 5

RECENT_WINDOW = timedelta(hours=24)

SECONDS_PER_DAY = 24 * 60 * 60


def _round2(value: float) -> float:
    return round(value, 2)


def age_in_days(created_at: datetime, now: datetime) -> int:
    """Whole days elapsed since creation, never negative."""
    return max(0, int((now - created_at).total_seconds() // SECONDS_PER_DAY))


def average_clicks_per_day(total_clicks: int, age_days: int) -> Union[int, float]:
    """Clicks per day of age; same-day records report the raw total."""
    if age_days > 0:
        return _round2(total_clicks / age_days)
    return total_clicks


def hourly_breakdown(stats: StatsRecord, tz: Optional[tzinfo] = None) -> Dict[int, int]:
    """Click counts by hour of day in ``tz`` (local zone when None)."""
    counts = Counter(click.timestamp.astimezone(tz).hour for click in stats.click_details)
    return dict(sorted(counts.items()))


def daily_breakdown(stats: StatsRecord, tz: Optional[tzinfo] = None) -> Dict[str, int]:
    """Click counts by calendar date (YYYY-MM-DD) in ``tz`` (local zone when None)."""
    counts = Counter(
        click.timestamp.astimezone(tz).strftime("%Y-%m-%d") for click in stats.click_details
    )
    return dict(sorted(counts.items()))


def build_report(
    stats: StatsRecord,
    link: Optional[LinkRecord],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> Dict[str, Any]:
    """Build the statistics report for one short code.

    Args:
        stats: Snapshot of the short code's click analytics
        link: Matching link record, if it still exists
        now: Reference time for age and recency computations
        tz: Zone used for hourly and daily buckets

    Returns:
        Report dictionary using the public field names
    """
    age_days = age_in_days(stats.created_at, now)
    window_start = now - RECENT_WINDOW
    recent = stats.click_details[-RECENT_ACTIVITY_LIMIT:]

    return {
        "shortcode": stats.shortcode,
        "originalUrl": stats.original_url,
        "createdAt": stats.created_at,
        "totalClicks": stats.total_clicks,
        "lastAccessed": stats.last_accessed,
        "isActive": link.is_active if link else False,
        "expiresAt": link.expires_at if link else None,
        "analytics": {
            "ageInDays": age_days,
            "avgClicksPerDay": average_clicks_per_day(stats.total_clicks, age_days),
            "recentClicks24h": sum(
                1 for click in stats.click_details if click.timestamp > window_start
            ),
            "hourlyBreakdown": hourly_breakdown(stats, tz),
            "dailyBreakdown": daily_breakdown(stats, tz),
        },
        "recentActivity": [
            {"timestamp": click.timestamp, "ip": click.ip, "userAgent": click.user_agent}
            for click in recent
        ],
    }


def build_summary(
    links: Iterable[LinkRecord],
    stats: Iterable[StatsRecord],
    now: datetime,
) -> Dict[str, Any]:
    """Service-wide totals.

    A link counts as active while it is flagged active and its expiry lies
    strictly after ``now``; every other link counts as expired.
    """
    links = list(links)
    total_urls = len(links)
    active_urls = sum(1 for link in links if link.is_active and link.expires_at > now)
    total_clicks = sum(record.total_clicks for record in stats)

    return {
        "totalUrls": total_urls,
        "activeUrls": active_urls,
        "expiredUrls": total_urls - active_urls,
        "totalClicks": total_clicks,
        "avgClicksPerUrl": _round2(total_clicks / total_urls) if total_urls > 0 else 0,
    }
