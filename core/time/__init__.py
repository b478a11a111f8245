"""
POS Core Time — Public API
============================
Explicit clock protocol and calendar period helpers.
Doctrine: NO datetime.now() in cart, checkout or reporting logic.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
)
from core.time.temporal import (
    END_OF_DAY,
    Period,
    TimeWindow,
    WeekStart,
    date_range,
    day_window,
    previous_anchor,
    week_first_day,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "END_OF_DAY",
    "Period",
    "TimeWindow",
    "WeekStart",
    "date_range",
    "day_window",
    "previous_anchor",
    "week_first_day",
]
