"""Defaults, snapshot reasons, and command names used by the pomodoro engine."""

from __future__ import annotations

DEFAULT_WORK_DURATION_MS = 25 * 60 * 1000
DEFAULT_SHORT_BREAK_DURATION_MS = 5 * 60 * 1000
DEFAULT_LONG_BREAK_DURATION_MS = 15 * 60 * 1000
DEFAULT_LONG_BREAK_EVERY = 4
DEFAULT_TICK_INTERVAL_MS = 1000

REASON_SYNC = "sync"
REASON_STARTED = "started"
REASON_TICK = "tick"
REASON_EXPIRED = "expired"
REASON_TRANSITION = "transition"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_STOPPED = "stopped"

PRESET_CLASSIC = "classic"
PRESET_EXTENDED = "extended"
