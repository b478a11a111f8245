"""
POS Core Time — Calendar Periods
==================================
Pure functions for reporting windows.
All functions take explicit date/tz arguments — no hidden clock access.

Windows are closed intervals. A day runs from 00:00:00.000 to
23:59:59.999 local time, so a ledger entry stamped exactly at the
last millisecond of a day still belongs to that day.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum


# Last representable millisecond of a day.
END_OF_DAY = time(23, 59, 59, 999000)


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class Period(Enum):
    """Reporting period granularity."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class WeekStart(Enum):
    """First weekday of a calendar week (values follow date.weekday())."""
    MONDAY = 0
    SUNDAY = 6


# ══════════════════════════════════════════════════════════════
# TIME WINDOW — Closed interval [start, end]
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TimeWindow:
    """
    A closed time interval [start, end].

    Invariant: start <= end (enforced at construction).
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"TimeWindow start ({self.start}) must be <= end ({self.end})."
            )

    def contains(self, dt: datetime) -> bool:
        """Check if datetime falls within window (inclusive both ends)."""
        return self.start <= dt <= self.end

    def duration(self) -> timedelta:
        return self.end - self.start


# ══════════════════════════════════════════════════════════════
# PURE TEMPORAL FUNCTIONS
# ══════════════════════════════════════════════════════════════

def day_window(day: date, tz: tzinfo) -> TimeWindow:
    return TimeWindow(
        start=datetime.combine(day, time.min, tzinfo=tz),
        end=datetime.combine(day, END_OF_DAY, tzinfo=tz),
    )


def week_first_day(anchor: date, week_start: WeekStart) -> date:
    offset = (anchor.weekday() - week_start.value) % 7
    return anchor - timedelta(days=offset)


def date_range(
    period: Period,
    anchor: date,
    tz: tzinfo,
    week_start: WeekStart = WeekStart.MONDAY,
) -> TimeWindow:
    """
    Return the calendar window of `period` that contains `anchor`.

    Weeks are aligned calendar weeks beginning on `week_start`,
    not rolling seven-day windows ending today.
    """
    if isinstance(anchor, datetime):
        anchor = anchor.astimezone(tz).date()

    if period is Period.DAY:
        first, last = anchor, anchor
    elif period is Period.WEEK:
        first = week_first_day(anchor, week_start)
        last = first + timedelta(days=6)
    elif period is Period.MONTH:
        first = anchor.replace(day=1)
        last = anchor.replace(
            day=calendar.monthrange(anchor.year, anchor.month)[1]
        )
    elif period is Period.YEAR:
        first = date(anchor.year, 1, 1)
        last = date(anchor.year, 12, 31)
    else:
        raise ValueError(f"Unsupported period: {period!r}")

    return TimeWindow(
        start=day_window(first, tz).start,
        end=day_window(last, tz).end,
    )


def previous_anchor(period: Period, anchor: date) -> date:
    """
    Step an anchor back by one period.

    Months clamp the day to the length of the previous month
    (31 March -> 28/29 February).
    """
    if period is Period.DAY:
        return anchor - timedelta(days=1)
    if period is Period.WEEK:
        return anchor - timedelta(days=7)
    if period is Period.MONTH:
        year, month = (anchor.year - 1, 12) if anchor.month == 1 else (
            anchor.year, anchor.month - 1
        )
        day = min(anchor.day, calendar.monthrange(year, month)[1])
        return date(year, month, day)
    if period is Period.YEAR:
        if anchor.month == 2 and anchor.day == 29:
            return date(anchor.year - 1, 2, 28)
        return anchor.replace(year=anchor.year - 1)
    raise ValueError(f"Unsupported period: {period!r}")
