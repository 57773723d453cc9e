"""Dispatcher that applies UI commands to the timer engine and task checklist."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from contracts.ui_protocol import (
    COMMAND_ADD_TASK,
    COMMAND_APPLY_PRESET,
    COMMAND_PAUSE,
    COMMAND_RESET,
    COMMAND_SET_CUSTOM_DURATIONS,
    COMMAND_START,
    COMMAND_TOGGLE,
)
from pomodoro import Configuration, InvalidConfiguration, TimerEngine, apply_preset

from .tasks import TaskChecklist
from .ui import RuntimeUIPublisher


class CommandRejected(ValueError):
    """Raised when a command carries input the runtime cannot accept."""


class RuntimeCommandDispatcher:
    """Routes decoded UI commands to engine, preset, and checklist handlers."""
    def __init__(
        self,
        *,
        logger: logging.Logger,
        engine: TimerEngine,
        tasks: TaskChecklist,
        ui: RuntimeUIPublisher,
    ):
        self._logger = logger
        self._engine = engine
        self._tasks = tasks
        self._ui = ui

    def handle_command(self, command: Mapping[str, Any]) -> bool:
        """Apply one command; rejected input is reported to the UI and returns False."""
        name = command.get("command")
        try:
            if name == COMMAND_START:
                self._engine.start()
            elif name == COMMAND_PAUSE:
                self._engine.pause()
            elif name == COMMAND_TOGGLE:
                if self._engine.is_running:
                    self._engine.pause()
                else:
                    self._engine.start()
            elif name == COMMAND_RESET:
                self._engine.reset(auto_start=_as_flag(command.get("auto_start", False)))
            elif name == COMMAND_APPLY_PRESET:
                self._apply_preset(command)
            elif name == COMMAND_SET_CUSTOM_DURATIONS:
                self._set_custom_durations(command)
            elif name == COMMAND_ADD_TASK:
                self._add_task(command)
            else:
                raise CommandRejected(f"Unsupported command: {name!r}")
        except (CommandRejected, InvalidConfiguration) as error:
            self._logger.warning("Command %s rejected: %s", name, error)
            self._ui.publish_error(str(error), command=name if isinstance(name, str) else None)
            return False

        self._logger.debug("Command %s applied", name)
        return True

    def _apply_preset(self, command: Mapping[str, Any]) -> None:
        preset = command.get("preset")
        if not isinstance(preset, str) or not preset.strip():
            raise CommandRejected("apply_preset requires a preset name")
        configuration = apply_preset(self._engine.configuration, preset)
        self._logger.info("Applying preset %s", preset)
        self._engine.set_phase_and_durations(configuration)

    def _set_custom_durations(self, command: Mapping[str, Any]) -> None:
        current = self._engine.configuration
        configuration = Configuration.from_seconds(
            _parse_seconds(command.get("work_seconds"), "work_seconds"),
            _parse_seconds(command.get("short_break_seconds"), "short_break_seconds"),
            _parse_seconds(command.get("long_break_seconds"), "long_break_seconds"),
            long_break_every=current.long_break_every,
        )
        self._logger.info(
            "Custom durations saved: work=%ss short_break=%ss long_break=%ss",
            configuration.work_duration_ms // 1000,
            configuration.short_break_duration_ms // 1000,
            configuration.long_break_duration_ms // 1000,
        )
        self._engine.set_phase_and_durations(configuration)

    def _add_task(self, command: Mapping[str, Any]) -> None:
        title = command.get("title")
        if not isinstance(title, str):
            raise CommandRejected("add_task requires a title")
        try:
            self._tasks.add(title)
        except ValueError as error:
            raise CommandRejected(str(error)) from error
        self._ui.publish_tasks(self._tasks.items())


def _parse_seconds(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise CommandRejected(f"{field} must be a whole number of seconds")
    if isinstance(value, int):
        seconds = value
    elif isinstance(value, str):
        try:
            seconds = int(value.strip())
        except ValueError as error:
            raise CommandRejected(f"{field} must be a whole number of seconds") from error
    else:
        raise CommandRejected(f"{field} must be a whole number of seconds")

    if seconds < 0:
        raise CommandRejected(f"{field} must not be negative")
    return seconds


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)
