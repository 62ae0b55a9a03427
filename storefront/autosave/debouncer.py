"""
Debounce and throttle helpers.

Each helper is a small stateful object owned by one call site, so two
editors never share a pending timer.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], Any]


def _thread_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class Debouncer:
    """
    Trailing-edge debounce.

    Every call cancels the pending invocation and schedules a new one
    `wait_ms` later with the latest arguments. Errors raised by `func`
    are logged and not retried.

    Usage:
        save = Debouncer(store.update_shop, wait_ms=1000)
        save("shop-1", {"name": "A"})
        save("shop-1", {"name": "Ab"})   # only this one is persisted
    """

    def __init__(self, func: Callable[..., Any], wait_ms: int = 1000,
                 timer_factory: Optional[TimerFactory] = None):
        self.func = func
        self.wait_ms = wait_ms
        self._timer_factory = timer_factory or _thread_timer
        self._lock = threading.Lock()
        self._timer: Any = None
        self._generation = 0
        self._args: Tuple = ()
        self._kwargs: dict = {}

    def __call__(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._args, self._kwargs = args, kwargs
            self._generation += 1
            generation = self._generation
            self._timer = self._timer_factory(self.wait_ms / 1000, lambda: self._fire(generation))

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def _fire(self, generation: Optional[int] = None) -> None:
        with self._lock:
            # A superseded timer may still fire after cancel()
            if self._timer is None or generation not in (None, self._generation):
                return
            self._timer = None
            args, kwargs = self._args, self._kwargs

        try:
            self.func(*args, **kwargs)
        except Exception as e:
            logger.error("Auto-save failed: %s", e)

    def flush(self) -> None:
        """Run the pending call now, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
        self._fire()

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None


class Throttler:
    """
    Leading-edge throttle: runs at most once per `limit_ms`, extra calls
    inside the window are dropped.
    """

    def __init__(self, func: Callable[..., Any], limit_ms: int,
                 clock: Callable[[], float] = time.monotonic):
        self.func = func
        self.limit_ms = limit_ms
        self._clock = clock
        self._last_run: Optional[float] = None

    def __call__(self, *args, **kwargs) -> bool:
        """Returns True if func ran."""
        now = self._clock()
        if self._last_run is not None and (now - self._last_run) * 1000 < self.limit_ms:
            return False
        self._last_run = now
        self.func(*args, **kwargs)
        return True
