"""Tests for storefront/autosave/debouncer.py"""

import threading
from unittest.mock import MagicMock

import pytest

from storefront.autosave.debouncer import Debouncer, Throttler


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback()


class FakeTimerFactory:
    """Collects scheduled timers instead of starting threads."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]


@pytest.fixture
def timers():
    return FakeTimerFactory()


class TestDebouncer:
    def test_waits_before_running(self, timers):
        func = MagicMock()
        debounced = Debouncer(func, wait_ms=1000, timer_factory=timers)

        debounced("shop-1", {"name": "A"})

        func.assert_not_called()
        assert debounced.pending
        assert timers.last.delay == 1.0

    def test_runs_once_with_last_arguments(self, timers):
        func = MagicMock()
        debounced = Debouncer(func, wait_ms=500, timer_factory=timers)

        debounced("shop-1", {"name": "A"})
        debounced("shop-1", {"name": "Ab"})
        debounced("shop-1", {"name": "Abc"})
        timers.last.fire()

        func.assert_called_once_with("shop-1", {"name": "Abc"})
        assert not debounced.pending

    def test_new_call_cancels_previous_timer(self, timers):
        debounced = Debouncer(MagicMock(), timer_factory=timers)

        debounced(1)
        debounced(2)

        assert timers.timers[0].cancelled
        assert not timers.timers[1].cancelled

    def test_superseded_timer_does_nothing(self, timers):
        func = MagicMock()
        debounced = Debouncer(func, timer_factory=timers)

        debounced(1)
        debounced(2)
        timers.timers[0].fire()

        func.assert_not_called()
        timers.last.fire()
        func.assert_called_once_with(2)

    def test_flush_runs_pending_now(self, timers):
        func = MagicMock()
        debounced = Debouncer(func, timer_factory=timers)

        debounced("x")
        debounced.flush()

        func.assert_called_once_with("x")
        assert timers.last.cancelled
        assert not debounced.pending

    def test_flush_without_pending_call(self, timers):
        func = MagicMock()
        Debouncer(func, timer_factory=timers).flush()
        func.assert_not_called()

    def test_cancel_drops_pending_call(self, timers):
        func = MagicMock()
        debounced = Debouncer(func, timer_factory=timers)

        debounced("x")
        debounced.cancel()
        timers.last.fire()

        func.assert_not_called()
        assert not debounced.pending

    def test_errors_are_logged_not_raised(self, timers, caplog):
        func = MagicMock(side_effect=RuntimeError("network down"))
        debounced = Debouncer(func, timer_factory=timers)

        debounced("x")
        with caplog.at_level("ERROR", logger="storefront.autosave.debouncer"):
            timers.last.fire()

        assert "Auto-save failed: network down" in caplog.text

    def test_runs_on_real_timer(self):
        done = threading.Event()
        calls = []

        def record(value):
            calls.append(value)
            done.set()

        debounced = Debouncer(record, wait_ms=20)
        debounced("a")
        debounced("b")

        assert done.wait(timeout=5)
        assert calls == ["b"]


class TestThrottler:
    def test_first_call_runs(self):
        func = MagicMock()
        throttled = Throttler(func, limit_ms=1000, clock=lambda: 10.0)

        assert throttled("a") is True
        func.assert_called_once_with("a")

    def test_calls_inside_window_are_dropped(self):
        now = [10.0]
        func = MagicMock()
        throttled = Throttler(func, limit_ms=1000, clock=lambda: now[0])

        throttled("a")
        now[0] = 10.5
        assert throttled("b") is False
        now[0] = 11.0
        assert throttled("c") is True

        assert [c.args[0] for c in func.call_args_list] == ["a", "c"]
