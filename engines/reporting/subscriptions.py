"""
POS Reporting Engine — Dashboard Refresh Task
===============================================
Recomputes the dashboard on start, on a fixed interval, and
whenever a checkout completes.

Lifecycle is owned by the view that shows the dashboard:
    task.start()   — refresh now, then every interval
    task.stop()    — cancel the pending timer

At most one aggregation is in flight: a refresh requested while
another is running is skipped, not queued. Failures are logged and
never kill the timer chain.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from engines.reporting.services import DashboardSnapshot, ReportingAggregator
    from engines.retail.events import SaleCompleted

logger = logging.getLogger("pos.reporting")

RefreshCallback = Callable[["DashboardSnapshot"], None]


class ReportRefreshTask:
    def __init__(
        self,
        aggregator: "ReportingAggregator",
        *,
        interval_seconds: float,
        on_refresh: Optional[RefreshCallback] = None,
        timer_factory=threading.Timer,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive.")
        self._aggregator = aggregator
        self._interval = interval_seconds
        self._on_refresh = on_refresh
        self._timer_factory = timer_factory
        self._timer = None
        self._running = False
        self._state_lock = threading.Lock()
        self._in_flight = threading.Lock()
        self._last_snapshot: Optional["DashboardSnapshot"] = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def last_snapshot(self) -> Optional["DashboardSnapshot"]:
        return self._last_snapshot

    def start(self) -> None:
        with self._state_lock:
            if self._running:
                return
            self._running = True
        self.refresh_now()
        self._schedule()

    def stop(self) -> None:
        with self._state_lock:
            self._running = False
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def refresh_now(self) -> Optional["DashboardSnapshot"]:
        """Run one aggregation unless one is already in flight."""
        if not self._in_flight.acquire(blocking=False):
            logger.debug("Dashboard refresh skipped: previous run still in flight")
            return None
        try:
            snapshot = self._aggregator.dashboard()
            self._last_snapshot = snapshot
            if self._on_refresh is not None:
                self._on_refresh(snapshot)
            return snapshot
        except Exception as exc:
            logger.error(f"Dashboard refresh failed: {exc}", exc_info=True)
            return None
        finally:
            self._in_flight.release()

    def handle_sale_completed(self, completed: "SaleCompleted") -> None:
        """Checkout completion listener: reflect the new batch at once."""
        if self._running:
            logger.debug(f"Refreshing dashboard after {completed.batch_id}")
            self.refresh_now()

    def _schedule(self) -> None:
        with self._state_lock:
            if not self._running:
                return
            timer = self._timer_factory(self._interval, self._tick)
            timer.daemon = True
            self._timer = timer
        timer.start()

    def _tick(self) -> None:
        if not self._running:
            return
        self.refresh_now()
        self._schedule()
