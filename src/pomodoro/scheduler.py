"""Monotonic interval scheduler pumped by the host loop."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

TickCallback = Callable[[], None]


class TickHandle:
    """Registration returned by `TickScheduler.schedule`; cancel is synchronous."""

    def __init__(
        self,
        scheduler: "TickScheduler",
        interval_seconds: float,
        callback: TickCallback,
        next_due: float,
    ):
        self._scheduler = scheduler
        self._interval_seconds = interval_seconds
        self._callback = callback
        self._next_due = next_due
        self._cancelled = False

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    @property
    def next_due(self) -> float:
        return self._next_due

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._scheduler._discard(self)


class TickScheduler:
    """Fires registered callbacks once per elapsed interval when `run_due` is called.

    The host loop owns the pumping thread; callbacks always run on that
    thread, never concurrently with each other.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        self._clock = clock
        self._logger = logger or logging.getLogger("pomodoro.scheduler")
        self._lock = threading.Lock()
        self._handles: list[TickHandle] = []

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._handles)

    def schedule(self, interval_seconds: float, callback: TickCallback) -> TickHandle:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")

        handle = TickHandle(
            self,
            float(interval_seconds),
            callback,
            self._clock() + interval_seconds,
        )
        with self._lock:
            self._handles.append(handle)
        self._logger.debug("Scheduled tick every %.3fs", interval_seconds)
        return handle

    def seconds_until_next(self) -> Optional[float]:
        with self._lock:
            if not self._handles:
                return None
            next_due = min(handle.next_due for handle in self._handles)
        return max(0.0, next_due - self._clock())

    def run_due(self) -> int:
        """Fire every due interval and return the number of callbacks invoked.

        Handles registered while this call runs wait for the next call.
        """
        now = self._clock()
        with self._lock:
            handles = list(self._handles)

        fired = 0
        for handle in handles:
            while not handle.cancelled and handle.next_due <= now:
                handle._next_due += handle.interval_seconds
                fired += 1
                try:
                    handle._callback()
                except Exception as error:
                    self._logger.error("Tick callback failed: %s", error, exc_info=True)
        return fired

    def cancel_all(self) -> None:
        with self._lock:
            handles = list(self._handles)
        for handle in handles:
            handle.cancel()

    def _discard(self, handle: TickHandle) -> None:
        with self._lock:
            if handle in self._handles:
                self._handles.remove(handle)
