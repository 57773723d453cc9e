"""Thread-safe pomodoro countdown engine with automatic work/break cycling."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from .config import Configuration, Phase
from .constants import (
    DEFAULT_TICK_INTERVAL_MS,
    REASON_EXPIRED,
    REASON_PAUSED,
    REASON_RESET,
    REASON_STARTED,
    REASON_STOPPED,
    REASON_SYNC,
    REASON_TICK,
    REASON_TRANSITION,
)
from .cycle import next_phase
from .errors import (
    DegenerateConfiguration,
    EngineClosed,
    TickSourceError,
    TimerEngineError,
)

# Zero-length phases may chain at most once through every phase per call.
MAX_AUTO_TRANSITIONS = len(Phase)


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable engine state published to snapshot listeners."""
    phase: Phase
    remaining_ms: int
    is_running: bool
    work_sessions_completed: int
    duration_ms: int
    reason: str = REASON_SYNC


class TickHandleLike(Protocol):
    def cancel(self) -> None:
        ...


class TickSourceLike(Protocol):
    def schedule(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
    ) -> TickHandleLike:
        ...


SnapshotListener = Callable[[TimerSnapshot], None]
PhaseCompletedListener = Callable[[], None]
ErrorListener = Callable[[TimerEngineError], None]


class TimerEngine:
    """Owns phase, remaining time and running state; drives one tick registration."""

    def __init__(
        self,
        configuration: Optional[Configuration] = None,
        *,
        tick_source: TickSourceLike,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        logger: Optional[logging.Logger] = None,
    ):
        if tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be greater than zero")

        self._configuration = configuration or Configuration()
        self._tick_source = tick_source
        self._tick_interval_ms = int(tick_interval_ms)
        self._logger = logger or logging.getLogger("pomodoro")
        self._lock = threading.RLock()

        self._phase = Phase.WORK
        self._duration_ms = self._configuration.duration_for(Phase.WORK)
        self._remaining_ms = self._duration_ms
        self._running = False
        self._work_sessions_completed = 0
        self._handle: Optional[TickHandleLike] = None
        self._closed = False

        self._snapshot_listeners: list[SnapshotListener] = []
        self._phase_completed_listeners: list[PhaseCompletedListener] = []
        self._error_listeners: list[ErrorListener] = []

    @property
    def configuration(self) -> Configuration:
        with self._lock:
            return self._configuration

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def snapshot(self) -> TimerSnapshot:
        with self._lock:
            return self._snapshot_locked(REASON_SYNC)

    # ----- Subscriptions -----
    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        return self._add_listener(self._snapshot_listeners, listener)

    def on_phase_completed(self, listener: PhaseCompletedListener) -> Callable[[], None]:
        return self._add_listener(self._phase_completed_listeners, listener)

    def on_error(self, listener: ErrorListener) -> Callable[[], None]:
        return self._add_listener(self._error_listeners, listener)

    def _add_listener(self, listeners: list, listener) -> Callable[[], None]:
        with self._lock:
            self._ensure_open_locked()
            listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in listeners:
                    listeners.remove(listener)

        return unsubscribe

    # ----- Commands -----
    def start(self) -> None:
        with self._lock:
            self._ensure_open_locked()
            if self._running:
                return
            self._start_locked(REASON_STARTED, transitions=0)

    def pause(self) -> None:
        with self._lock:
            self._ensure_open_locked()
            if not self._running:
                return
            self._cancel_tick_locked()
            self._running = False
            self._logger.info(
                "Timer paused: phase=%s remaining=%sms",
                self._phase.value,
                self._remaining_ms,
            )
            self._emit_snapshot_locked(REASON_PAUSED)

    def reset(self, auto_start: bool = False) -> None:
        with self._lock:
            self._ensure_open_locked()
            self._cancel_tick_locked()
            self._running = False
            self._load_phase_duration_locked()
            self._logger.info(
                "Timer reset: phase=%s duration=%sms auto_start=%s",
                self._phase.value,
                self._duration_ms,
                auto_start,
            )
            self._emit_snapshot_locked(REASON_RESET)
            if auto_start:
                self._start_locked(REASON_STARTED, transitions=0)

    def reconfigure(self, configuration: Configuration) -> None:
        """Replace durations; the running countdown keeps its current length."""
        with self._lock:
            self._ensure_open_locked()
            self._configuration = configuration
            self._logger.info(
                "Timer reconfigured: work=%sms short_break=%sms long_break=%sms every=%s",
                configuration.work_duration_ms,
                configuration.short_break_duration_ms,
                configuration.long_break_duration_ms,
                configuration.long_break_every,
            )

    def set_phase_and_durations(
        self,
        configuration: Configuration,
        phase: Optional[Phase] = None,
    ) -> None:
        with self._lock:
            self.reconfigure(configuration)
            if phase is not None:
                self._phase = Phase(phase)
            self.reset(auto_start=False)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._cancel_tick_locked()
            self._running = False
            self._closed = True
            self._snapshot_listeners.clear()
            self._phase_completed_listeners.clear()
            self._error_listeners.clear()
            self._logger.info("Timer engine closed")

    # ----- Tick and expiry -----
    def _on_tick(self) -> None:
        with self._lock:
            if self._closed or not self._running:
                return

            self._remaining_ms = max(0, self._remaining_ms - self._tick_interval_ms)
            if self._remaining_ms > 0:
                self._logger.debug(
                    "Tick: phase=%s remaining=%sms",
                    self._phase.value,
                    self._remaining_ms,
                )
                self._emit_snapshot_locked(REASON_TICK)
                return

            self._emit_snapshot_locked(REASON_EXPIRED)
            self._expire_locked(transitions=0)

    def _start_locked(self, reason: str, *, transitions: int) -> None:
        if self._remaining_ms <= 0:
            if transitions >= MAX_AUTO_TRANSITIONS:
                self._stop_degenerate_locked(transitions)
                return
            self._running = True
            self._emit_snapshot_locked(REASON_EXPIRED)
            self._expire_locked(transitions=transitions)
            return

        try:
            self._handle = self._tick_source.schedule(
                self._tick_interval_ms / 1000.0,
                self._on_tick,
            )
        except Exception as error:
            self._handle = None
            self._running = False
            failure = TickSourceError(f"Failed to schedule timer ticks: {error}")
            failure.__cause__ = error
            self._logger.error("%s", failure, exc_info=True)
            self._emit_error_locked(failure)
            self._emit_snapshot_locked(REASON_STOPPED)
            return

        self._running = True
        self._logger.info(
            "Timer started: phase=%s remaining=%sms",
            self._phase.value,
            self._remaining_ms,
        )
        self._emit_snapshot_locked(reason)

    def _expire_locked(self, *, transitions: int) -> None:
        self._cancel_tick_locked()
        self._running = False

        finished = self._phase
        if finished is Phase.WORK:
            self._work_sessions_completed += 1
        self._phase = next_phase(
            finished,
            self._work_sessions_completed,
            self._configuration.long_break_every,
        )
        self._load_phase_duration_locked()
        self._logger.info(
            "Phase finished: %s -> %s (work sessions completed=%s)",
            finished.value,
            self._phase.value,
            self._work_sessions_completed,
        )

        self._emit_phase_completed_locked()
        if self._closed or self._running:
            # A listener closed the engine or already restarted it.
            return
        self._start_locked(REASON_TRANSITION, transitions=transitions + 1)

    def _stop_degenerate_locked(self, transitions: int) -> None:
        self._running = False
        failure = DegenerateConfiguration(
            f"Stopped after {transitions} consecutive zero-length phases; "
            "configure at least one phase with a positive duration"
        )
        self._logger.error("%s", failure)
        self._emit_error_locked(failure)
        self._emit_snapshot_locked(REASON_STOPPED)

    # ----- Internals -----
    def _ensure_open_locked(self) -> None:
        if self._closed:
            raise EngineClosed("Timer engine is closed")

    def _cancel_tick_locked(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()

    def _load_phase_duration_locked(self) -> None:
        self._duration_ms = self._configuration.duration_for(self._phase)
        self._remaining_ms = self._duration_ms

    def _snapshot_locked(self, reason: str) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self._phase,
            remaining_ms=self._remaining_ms,
            is_running=self._running,
            work_sessions_completed=self._work_sessions_completed,
            duration_ms=self._duration_ms,
            reason=reason,
        )

    def _emit_snapshot_locked(self, reason: str) -> None:
        snapshot = self._snapshot_locked(reason)
        for listener in tuple(self._snapshot_listeners):
            try:
                listener(snapshot)
            except Exception as error:
                self._logger.error("Snapshot listener failed: %s", error, exc_info=True)

    def _emit_phase_completed_locked(self) -> None:
        for listener in tuple(self._phase_completed_listeners):
            try:
                listener()
            except Exception as error:
                self._logger.error(
                    "Phase completed listener failed: %s",
                    error,
                    exc_info=True,
                )

    def _emit_error_locked(self, failure: TimerEngineError) -> None:
        for listener in tuple(self._error_listeners):
            try:
                listener(failure)
            except Exception as error:
                self._logger.error("Error listener failed: %s", error, exc_info=True)
