"""
Tests for engines.reporting.subscriptions — ReportRefreshTask.
"""

import threading

import pytest

from engines.reporting.subscriptions import ReportRefreshTask


class FakeTimer:
    """Records scheduling instead of sleeping."""

    created = []

    def __init__(self, interval, fn):
        self.interval = interval
        self.fn = fn
        self.started = False
        self.cancelled = False
        self.daemon = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fn()


class StubAggregator:
    def __init__(self, fail=False):
        self.calls = 0
        self.fail = fail

    def dashboard(self):
        self.calls += 1
        if self.fail:
            raise RuntimeError("ledger offline")
        return {"call": self.calls}


class StubSale:
    batch_id = "TX1"


@pytest.fixture(autouse=True)
def _reset_timers():
    FakeTimer.created = []
    yield
    FakeTimer.created = []


def _task(aggregator, on_refresh=None):
    return ReportRefreshTask(
        aggregator,
        interval_seconds=60,
        on_refresh=on_refresh,
        timer_factory=FakeTimer,
    )


class TestLifecycle:
    def test_start_refreshes_then_schedules(self):
        agg = StubAggregator()
        seen = []
        task = _task(agg, on_refresh=seen.append)
        task.start()

        assert task.is_running
        assert agg.calls == 1
        assert seen == [{"call": 1}]
        assert len(FakeTimer.created) == 1
        assert FakeTimer.created[0].interval == 60
        assert FakeTimer.created[0].started
        assert FakeTimer.created[0].daemon

    def test_tick_refreshes_and_reschedules(self):
        agg = StubAggregator()
        task = _task(agg)
        task.start()
        FakeTimer.created[-1].fire()
        assert agg.calls == 2
        assert len(FakeTimer.created) == 2
        assert task.last_snapshot == {"call": 2}

    def test_stop_cancels_pending_timer(self):
        agg = StubAggregator()
        task = _task(agg)
        task.start()
        task.stop()
        assert not task.is_running
        assert FakeTimer.created[0].cancelled

        # a tick already past cancel() does nothing
        FakeTimer.created[0].fire()
        assert agg.calls == 1
        assert len(FakeTimer.created) == 1

    def test_start_twice_is_noop(self):
        agg = StubAggregator()
        task = _task(agg)
        task.start()
        task.start()
        assert agg.calls == 1

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError, match="interval_seconds"):
            ReportRefreshTask(StubAggregator(), interval_seconds=0)


class TestRefreshBehaviour:
    def test_failure_keeps_timer_chain(self):
        agg = StubAggregator(fail=True)
        task = _task(agg)
        task.start()
        FakeTimer.created[-1].fire()
        assert agg.calls == 2
        assert len(FakeTimer.created) == 2
        assert task.last_snapshot is None

    def test_overlapping_refresh_is_skipped(self):
        entered = threading.Event()
        release = threading.Event()

        class SlowAggregator(StubAggregator):
            def dashboard(self):
                entered.set()
                release.wait(timeout=5)
                return super().dashboard()

        agg = SlowAggregator()
        task = _task(agg)
        worker = threading.Thread(target=task.refresh_now)
        worker.start()
        entered.wait(timeout=5)

        assert task.refresh_now() is None
        release.set()
        worker.join(timeout=5)
        assert agg.calls == 1

    def test_sale_completed_triggers_refresh_while_running(self):
        agg = StubAggregator()
        task = _task(agg)
        task.handle_sale_completed(StubSale())
        assert agg.calls == 0

        task.start()
        task.handle_sale_completed(StubSale())
        assert agg.calls == 2
