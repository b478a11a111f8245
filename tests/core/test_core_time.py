"""
Tests for core.time — Clock protocol and calendar periods.
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from core.time.clock import FixedClock, SystemClock
from core.time.temporal import (
    END_OF_DAY,
    Period,
    TimeWindow,
    WeekStart,
    date_range,
    previous_anchor,
    week_first_day,
)

UTC = timezone.utc


# ── Clock Tests ──────────────────────────────────────────────

class TestSystemClock:
    def test_returns_utc_datetime(self):
        dt = SystemClock().now_utc()
        assert dt.tzinfo == timezone.utc


class TestFixedClock:
    def test_returns_fixed_time(self):
        fixed = datetime(2026, 3, 14, 12, 0, 0, tzinfo=UTC)
        clock = FixedClock(fixed)
        assert clock.now_utc() == fixed
        assert clock.now_utc() == fixed  # Same every time

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2026, 1, 1))

    def test_advance(self):
        fixed = datetime(2026, 3, 14, 12, 0, 0, tzinfo=UTC)
        clock = FixedClock(fixed)
        clock.advance(days=1, seconds=30)
        assert clock.now_utc() == fixed + timedelta(days=1, seconds=30)

    def test_normalises_to_utc(self):
        local = datetime(2026, 7, 1, 10, 0, tzinfo=ZoneInfo("Europe/London"))
        assert FixedClock(local).now_utc() == datetime(2026, 7, 1, 9, 0, tzinfo=UTC)


# ── TimeWindow Tests ─────────────────────────────────────────

class TestTimeWindow:
    def test_contains_is_inclusive(self):
        start = datetime(2026, 1, 1, tzinfo=UTC)
        end = datetime(2026, 1, 31, tzinfo=UTC)
        window = TimeWindow(start=start, end=end)
        assert window.contains(start)
        assert window.contains(end)
        assert not window.contains(end + timedelta(microseconds=1))

    def test_start_after_end_rejected(self):
        with pytest.raises(ValueError, match="must be <="):
            TimeWindow(
                start=datetime(2026, 2, 1, tzinfo=UTC),
                end=datetime(2026, 1, 1, tzinfo=UTC),
            )


# ── date_range Tests ─────────────────────────────────────────

class TestDateRange:
    def test_day(self):
        w = date_range(Period.DAY, date(2026, 3, 14), UTC)
        assert w.start == datetime(2026, 3, 14, 0, 0, tzinfo=UTC)
        assert w.end == datetime(2026, 3, 14, 23, 59, 59, 999000, tzinfo=UTC)
        assert w.end.time() == END_OF_DAY

    def test_week_monday_start(self):
        # 2026-03-14 is a Saturday
        w = date_range(Period.WEEK, date(2026, 3, 14), UTC)
        assert w.start.date() == date(2026, 3, 9)
        assert w.end.date() == date(2026, 3, 15)

    def test_week_sunday_start(self):
        w = date_range(Period.WEEK, date(2026, 3, 14), UTC, week_start=WeekStart.SUNDAY)
        assert w.start.date() == date(2026, 3, 8)
        assert w.end.date() == date(2026, 3, 14)

    def test_week_anchor_on_first_day(self):
        assert week_first_day(date(2026, 3, 9), WeekStart.MONDAY) == date(2026, 3, 9)
        assert week_first_day(date(2026, 3, 8), WeekStart.SUNDAY) == date(2026, 3, 8)

    def test_month(self):
        w = date_range(Period.MONTH, date(2028, 2, 10), UTC)
        assert w.start == datetime(2028, 2, 1, tzinfo=UTC)
        assert w.end == datetime(2028, 2, 29, 23, 59, 59, 999000, tzinfo=UTC)

    def test_year(self):
        w = date_range(Period.YEAR, date(2026, 6, 30), UTC)
        assert w.start == datetime(2026, 1, 1, tzinfo=UTC)
        assert w.end == datetime(2026, 12, 31, 23, 59, 59, 999000, tzinfo=UTC)

    def test_local_zone_boundaries(self):
        london = ZoneInfo("Europe/London")
        w = date_range(Period.DAY, date(2026, 7, 1), london)
        assert w.start.astimezone(UTC) == datetime(2026, 6, 30, 23, 0, tzinfo=UTC)

    def test_datetime_anchor_uses_zone_date(self):
        anchor = datetime(2026, 6, 30, 23, 30, tzinfo=UTC)
        w = date_range(Period.DAY, anchor, ZoneInfo("Europe/London"))
        assert w.start.date() == date(2026, 7, 1)


class TestPreviousAnchor:
    def test_day(self):
        assert previous_anchor(Period.DAY, date(2026, 3, 1)) == date(2026, 2, 28)

    def test_week(self):
        assert previous_anchor(Period.WEEK, date(2026, 3, 14)) == date(2026, 3, 7)

    def test_month_clamps_day(self):
        assert previous_anchor(Period.MONTH, date(2026, 3, 31)) == date(2026, 2, 28)

    def test_month_wraps_year(self):
        assert previous_anchor(Period.MONTH, date(2026, 1, 15)) == date(2025, 12, 15)

    def test_year_leap_day(self):
        assert previous_anchor(Period.YEAR, date(2028, 2, 29)) == date(2027, 2, 28)
