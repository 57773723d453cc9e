from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from contracts.ui_protocol import (
    EVENT_ERROR,
    EVENT_PHASE_COMPLETED,
    EVENT_TASKS,
    EVENT_TIMER,
    STATE_ERROR,
)
from pomodoro import (
    Configuration,
    TimerSnapshot,
    format_remaining,
    phase_sequence,
    progress_percent,
)

from .messages import phase_completed_message, timer_status_message


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        ...


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        if self._ui_server:
            self._ui_server.publish_state(state, message=message, **payload)

    def publish_timer_update(
        self,
        snapshot: TimerSnapshot,
        configuration: Configuration,
    ) -> None:
        upcoming = next(
            phase_sequence(
                snapshot.phase,
                snapshot.work_sessions_completed,
                configuration.long_break_every,
                1,
            )
        )
        payload: dict[str, Any] = {
            "reason": snapshot.reason,
            "phase": snapshot.phase.value,
            "remaining_ms": snapshot.remaining_ms,
            "remaining_text": format_remaining(snapshot.remaining_ms),
            "duration_ms": snapshot.duration_ms,
            "progress_percent": progress_percent(snapshot, configuration),
            "is_running": snapshot.is_running,
            "work_sessions_completed": snapshot.work_sessions_completed,
            "upcoming_phase": upcoming.value,
            "message": timer_status_message(snapshot),
        }
        self.publish(EVENT_TIMER, **payload)

    def publish_phase_completed(self, snapshot: TimerSnapshot) -> None:
        self.publish(
            EVENT_PHASE_COMPLETED,
            phase=snapshot.phase.value,
            work_sessions_completed=snapshot.work_sessions_completed,
            message=phase_completed_message(snapshot),
        )

    def publish_tasks(self, tasks: Iterable[str]) -> None:
        self.publish(EVENT_TASKS, tasks=list(tasks))

    def publish_error(self, message: str, *, command: Optional[str] = None) -> None:
        payload: dict[str, Any] = {"state": STATE_ERROR, "message": message}
        if command:
            payload["command"] = command
        self.publish(EVENT_ERROR, **payload)
