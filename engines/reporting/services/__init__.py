"""
POS Reporting Engine — Sales Aggregator
=========================================
Read-side analytics over the transaction ledger.

    date_range(period, anchor)   — calendar window containing anchor
    net_sales(entries)           — Σ (gross − discount)
    percent_change(cur, prior)   — prior 0 → 100 (full positive swing)
    dashboard(today)             — day / week / month / year, each
                                   against the preceding equal period
    drill_down(start, end, label)— raw entries behind a figure

This engine is READ ONLY: it never appends to the ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple

from core.config.rules import PosConfig
from core.ledger.entries import TransactionEntry
from core.ledger.store import LedgerStore
from core.time.clock import Clock, SystemClock
from core.time.temporal import Period, TimeWindow, date_range, previous_anchor

logger = logging.getLogger("pos.reporting")

ZERO = Decimal("0")
HUNDRED = Decimal("100")

PERIOD_TITLES: Dict[Period, str] = {
    Period.DAY: "Today's Sales",
    Period.WEEK: "Weekly Revenue",
    Period.MONTH: "Monthly Revenue",
    Period.YEAR: "Yearly Revenue",
}

PRIOR_LABELS: Dict[Period, str] = {
    Period.DAY: "yesterday",
    Period.WEEK: "last week",
    Period.MONTH: "last month",
    Period.YEAR: "last year",
}


# ══════════════════════════════════════════════════════════════
# PURE CALCULATORS
# ══════════════════════════════════════════════════════════════

def net_sales(entries: Iterable[TransactionEntry]) -> Decimal:
    return sum((e.gross_amount - e.discount_amount for e in entries), ZERO)


def percent_change(current: Decimal, prior: Decimal) -> Decimal:
    """
    Period-over-period change in percent.

    A zero prior period counts as a full positive swing (100),
    whatever the current value.
    """
    if prior == 0:
        return HUNDRED
    return (Decimal(current) - Decimal(prior)) / Decimal(prior) * HUNDRED


# ══════════════════════════════════════════════════════════════
# RESULTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PeriodComparison:
    period: Period
    title: str
    current_window: TimeWindow
    prior_window: TimeWindow
    current_sales: Decimal
    prior_sales: Decimal
    change_percent: Decimal

    @property
    def trend(self) -> str:
        return "up" if self.change_percent >= 0 else "down"

    @property
    def change_label(self) -> str:
        sign = "+" if self.change_percent >= 0 else ""
        rounded = self.change_percent.quantize(Decimal("1"))
        return f"{sign}{rounded}% from {PRIOR_LABELS[self.period]}"


@dataclass(frozen=True)
class DashboardSnapshot:
    anchor: date
    generated_at: datetime
    day: PeriodComparison
    week: PeriodComparison
    month: PeriodComparison
    year: PeriodComparison

    def comparisons(self) -> Tuple[PeriodComparison, ...]:
        return (self.day, self.week, self.month, self.year)


@dataclass(frozen=True)
class DrillDown:
    label: str
    window: TimeWindow
    entries: Tuple[TransactionEntry, ...]

    @property
    def net_sales(self) -> Decimal:
        return net_sales(self.entries)

    @property
    def batch_count(self) -> int:
        return len({e.batch_id for e in self.entries})


# ══════════════════════════════════════════════════════════════
# AGGREGATOR
# ══════════════════════════════════════════════════════════════

class ReportingAggregator:
    """Buckets the ledger by calendar period in the reporting time zone."""

    def __init__(
        self,
        *,
        ledger: LedgerStore,
        clock: Clock | None = None,
        config: PosConfig | None = None,
    ):
        self._ledger = ledger
        self._clock = clock or SystemClock()
        self._config = config or PosConfig()

    def today(self) -> date:
        return self._clock.now_utc().astimezone(self._config.tz).date()

    def date_range(self, period: Period, anchor: date) -> TimeWindow:
        return date_range(
            period,
            anchor,
            self._config.tz,
            week_start=self._config.week_start,
        )

    def sales_in(self, window: TimeWindow) -> Decimal:
        return net_sales(self._ledger.query(window.start, window.end))

    def compare(self, period: Period, anchor: Optional[date] = None) -> PeriodComparison:
        anchor = anchor or self.today()
        current_window = self.date_range(period, anchor)
        prior_window = self.date_range(period, previous_anchor(period, anchor))
        current = self.sales_in(current_window)
        prior = self.sales_in(prior_window)
        return PeriodComparison(
            period=period,
            title=PERIOD_TITLES[period],
            current_window=current_window,
            prior_window=prior_window,
            current_sales=current,
            prior_sales=prior,
            change_percent=percent_change(current, prior),
        )

    def dashboard(self, anchor: Optional[date] = None) -> DashboardSnapshot:
        anchor = anchor or self.today()
        snapshot = DashboardSnapshot(
            anchor=anchor,
            generated_at=self._clock.now_utc(),
            day=self.compare(Period.DAY, anchor),
            week=self.compare(Period.WEEK, anchor),
            month=self.compare(Period.MONTH, anchor),
            year=self.compare(Period.YEAR, anchor),
        )
        logger.debug(
            f"Dashboard for {anchor}: today {snapshot.day.current_sales}, "
            f"week {snapshot.week.current_sales}, "
            f"month {snapshot.month.current_sales}, "
            f"year {snapshot.year.current_sales}"
        )
        return snapshot

    def drill_down(self, start: datetime, end: datetime, label: str) -> DrillDown:
        """Raw ledger entries for an arbitrary window, for display."""
        window = TimeWindow(start=start, end=end)
        return DrillDown(
            label=label,
            window=window,
            entries=self._ledger.query(window.start, window.end),
        )

    def drill_down_for(self, period: Period, anchor: Optional[date] = None) -> DrillDown:
        window = self.date_range(period, anchor or self.today())
        return self.drill_down(window.start, window.end, PERIOD_TITLES[period])


__all__ = [
    "PERIOD_TITLES",
    "PRIOR_LABELS",
    "net_sales",
    "percent_change",
    "PeriodComparison",
    "DashboardSnapshot",
    "DrillDown",
    "ReportingAggregator",
]
