"""Tests for click analytics aggregation."""

from datetime import datetime, timedelta, timezone

from shortlinks.analytics import (
    age_in_days,
    average_clicks_per_day,
    build_report,
    build_summary,
)
from shortlinks.storage.models import ClickEvent, LinkRecord, StatsRecord

CREATED = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_stats(*hours_or_times, created_at=CREATED):
    clicks = []
    for value in hours_or_times:
        timestamp = value if isinstance(value, datetime) else created_at.replace(hour=value)
        clicks.append(ClickEvent(timestamp=timestamp, ip="10.0.0.1", user_agent="pytest"))
    return StatsRecord(
        shortcode="abc123",
        original_url="https://example.com",
        created_at=created_at,
        total_clicks=len(clicks),
        click_details=clicks,
        last_accessed=clicks[-1].timestamp if clicks else None,
    )


def make_link(**overrides):
    fields = dict(
        shortcode="abc123",
        original_url="https://example.com",
        created_at=CREATED,
        expires_at=CREATED + timedelta(minutes=30),
    )
    fields.update(overrides)
    return LinkRecord(**fields)


class TestAge:
    """Test age and averages."""

    def test_age_in_days_floors(self):
        assert age_in_days(CREATED, CREATED) == 0
        assert age_in_days(CREATED, CREATED + timedelta(hours=23, minutes=59)) == 0
        assert age_in_days(CREATED, CREATED + timedelta(days=3, hours=5)) == 3

    def test_age_in_days_never_negative(self):
        assert age_in_days(CREATED, CREATED - timedelta(days=2)) == 0

    def test_average_same_day_is_raw_total(self):
        assert average_clicks_per_day(7, 0) == 7
        assert isinstance(average_clicks_per_day(7, 0), int)

    def test_average_rounds_to_two_places(self):
        assert average_clicks_per_day(10, 3) == 3.33


class TestReport:
    """Test per short code report."""

    def test_hourly_breakdown(self):
        stats = make_stats(10, 10, 14)

        report = build_report(stats, make_link(), CREATED.replace(hour=15), tz=timezone.utc)

        assert report["analytics"]["hourlyBreakdown"] == {10: 2, 14: 1}
        assert report["analytics"]["dailyBreakdown"] == {"2024-03-01": 3}

    def test_breakdowns_follow_report_zone(self):
        stats = make_stats(datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc))
        plus_two = timezone(timedelta(hours=2))

        report = build_report(stats, make_link(), CREATED + timedelta(days=1), tz=plus_two)

        assert report["analytics"]["hourlyBreakdown"] == {1: 1}
        assert report["analytics"]["dailyBreakdown"] == {"2024-03-02": 1}

    def test_daily_breakdown_spans_days(self):
        stats = make_stats(
            datetime(2024, 3, 1, 10, tzinfo=timezone.utc),
            datetime(2024, 3, 2, 10, tzinfo=timezone.utc),
            datetime(2024, 3, 2, 11, tzinfo=timezone.utc),
        )

        report = build_report(stats, make_link(), CREATED + timedelta(days=2), tz=timezone.utc)

        assert report["analytics"]["dailyBreakdown"] == {"2024-03-01": 1, "2024-03-02": 2}
        assert report["analytics"]["ageInDays"] == 2
        assert report["analytics"]["avgClicksPerDay"] == 1.5

    def test_recent_clicks_window_excludes_boundary(self):
        now = datetime(2024, 3, 3, 12, tzinfo=timezone.utc)
        stats = make_stats(
            now - timedelta(hours=24),
            now - timedelta(hours=23, minutes=59),
            now - timedelta(minutes=1),
        )

        report = build_report(stats, make_link(), now, tz=timezone.utc)

        assert report["analytics"]["recentClicks24h"] == 2

    def test_recent_activity_keeps_last_five_in_order(self):
        times = [CREATED + timedelta(minutes=i) for i in range(8)]
        stats = make_stats(*times)

        report = build_report(stats, make_link(), CREATED + timedelta(hours=1), tz=timezone.utc)

        activity = report["recentActivity"]
        assert [entry["timestamp"] for entry in activity] == times[-5:]
        assert set(activity[0]) == {"timestamp", "ip", "userAgent"}

    def test_same_day_average_and_link_fields(self):
        stats = make_stats(10, 11)
        link = make_link(is_active=False)

        report = build_report(stats, link, CREATED.replace(hour=12), tz=timezone.utc)

        assert report["analytics"]["ageInDays"] == 0
        assert report["analytics"]["avgClicksPerDay"] == 2
        assert report["isActive"] is False
        assert report["expiresAt"] == link.expires_at
        assert report["totalClicks"] == 2
        assert report["lastAccessed"] == stats.last_accessed

    def test_missing_link(self):
        report = build_report(make_stats(), None, CREATED, tz=timezone.utc)

        assert report["isActive"] is False
        assert report["expiresAt"] is None
        assert report["analytics"]["hourlyBreakdown"] == {}
        assert report["recentActivity"] == []

    def test_deterministic(self):
        stats = make_stats(10, 12)
        now = CREATED + timedelta(days=1)

        assert build_report(stats, make_link(), now, timezone.utc) == build_report(
            stats, make_link(), now, timezone.utc
        )


class TestSummary:
    """Test service-wide summary."""

    def test_empty(self):
        summary = build_summary([], [], CREATED)

        assert summary == {
            "totalUrls": 0,
            "activeUrls": 0,
            "expiredUrls": 0,
            "totalClicks": 0,
            "avgClicksPerUrl": 0,
        }

    def test_counts(self):
        now = CREATED + timedelta(minutes=10)
        links = [
            make_link(shortcode="live"),
            make_link(shortcode="old", expires_at=CREATED + timedelta(minutes=5)),
            make_link(shortcode="off", is_active=False),
        ]
        stats = [make_stats(10, 11), make_stats(12), make_stats()]

        summary = build_summary(links, stats, now)

        assert summary["totalUrls"] == 3
        assert summary["activeUrls"] == 1
        assert summary["expiredUrls"] == 2
        assert summary["totalClicks"] == 3
        assert summary["avgClicksPerUrl"] == 1.0

    def test_expiry_instant_counts_as_expired(self):
        link = make_link()

        summary = build_summary([link], [make_stats()], link.expires_at)

        assert summary["activeUrls"] == 0
        assert summary["expiredUrls"] == 1
