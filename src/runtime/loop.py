"""Runtime orchestration loop for timer ticks and UI commands."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Mapping, Optional, Protocol

from app_config import AppConfig
from contracts.ui_protocol import STATE_IDLE, STATE_PAUSED, STATE_RUNNING
from pomodoro import (
    Configuration,
    TickScheduler,
    TimerEngine,
    TimerEngineError,
    TimerSnapshot,
)
from pomodoro.constants import REASON_EXPIRED, REASON_TICK

from .commands import RuntimeCommandDispatcher
from .messages import timer_status_message
from .tasks import TaskChecklist
from .ui import RuntimeUIPublisher, UIServerLike


class CommandSourceLike(UIServerLike, Protocol):
    def set_command_handler(
        self,
        handler: Optional[Callable[[dict[str, Any]], None]],
    ) -> None:
        ...

    def stop(self, timeout_seconds: float = 5.0) -> None:
        ...


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and shutdown flow."""
    setup_signal_handlers: Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    configuration: Configuration
    ui_server: Optional[CommandSourceLike]
    hooks: RuntimeHooks
    scheduler: Optional[TickScheduler] = None
    poll_interval_seconds: float = 0.1


class RuntimeEngine:
    """Main loop that pumps timer ticks and applies queued UI commands."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._scheduler = bootstrap.scheduler or TickScheduler(
            logger=logging.getLogger("pomodoro.scheduler"),
        )
        self._timer = TimerEngine(
            bootstrap.configuration,
            tick_source=self._scheduler,
            tick_interval_ms=bootstrap.app_config.timer.tick_interval_ms,
            logger=logging.getLogger("pomodoro"),
        )
        self._tasks = TaskChecklist(logger=logging.getLogger("runtime.tasks"))
        self._dispatcher = RuntimeCommandDispatcher(
            logger=self._logger,
            engine=self._timer,
            tasks=self._tasks,
            ui=self._ui,
        )

        self._commands: Queue[dict[str, Any]] = Queue()
        self._stop_requested = threading.Event()

        self._timer.subscribe(self._handle_snapshot)
        self._timer.on_phase_completed(self._handle_phase_completed)
        self._timer.on_error(self._handle_engine_error)

        if bootstrap.ui_server is not None:
            bootstrap.ui_server.set_command_handler(self.submit_command)

    @property
    def timer(self) -> TimerEngine:
        return self._timer

    @property
    def tasks(self) -> TaskChecklist:
        return self._tasks

    def submit_command(self, command: Mapping[str, Any]) -> None:
        """Queue a decoded UI command; safe to call from any thread."""
        self._commands.put(dict(command))

    def request_stop(self) -> None:
        self._stop_requested.set()

    def run(self) -> int:
        try:
            self._bootstrap.hooks.setup_signal_handlers(self.request_stop)
            self._publish_startup_sync()
            self._logger.info("Timer runtime ready.")

            while not self._stop_requested.is_set():
                self.run_once()
            return 0
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def run_once(self) -> None:
        """Fire due ticks, then wait briefly for one UI command and apply it."""
        self._scheduler.run_due()

        timeout = self._bootstrap.poll_interval_seconds
        until_next_tick = self._scheduler.seconds_until_next()
        if until_next_tick is not None:
            timeout = min(timeout, until_next_tick)

        try:
            command = self._commands.get(timeout=timeout)
        except Empty:
            return
        self._dispatcher.handle_command(command)

    def _publish_startup_sync(self) -> None:
        self._ui.publish_timer_update(self._timer.snapshot(), self._timer.configuration)
        self._ui.publish_tasks(self._tasks.items())
        self._ui.publish_state(STATE_IDLE, message=timer_status_message(self._timer.snapshot()))

    def _handle_snapshot(self, snapshot: TimerSnapshot) -> None:
        self._ui.publish_timer_update(snapshot, self._timer.configuration)
        if snapshot.reason in (REASON_EXPIRED, REASON_TICK):
            return
        if snapshot.is_running:
            state = STATE_RUNNING
        elif snapshot.remaining_ms < snapshot.duration_ms:
            state = STATE_PAUSED
        else:
            state = STATE_IDLE
        self._ui.publish_state(state, message=timer_status_message(snapshot))

    def _handle_phase_completed(self) -> None:
        self._ui.publish_phase_completed(self._timer.snapshot())

    def _handle_engine_error(self, error: TimerEngineError) -> None:
        self._ui.publish_error(str(error))

    def _shutdown(self) -> None:
        self._logger.info("Closing timer engine...")
        self._timer.close()
        self._scheduler.cancel_all()

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.set_command_handler(None)
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
