"""Web UI websocket event, state, and command constants."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_STATE_UPDATE = "state_update"
EVENT_TIMER = "timer"
EVENT_PHASE_COMPLETED = "phase_completed"
EVENT_TASKS = "tasks"
EVENT_ERROR = "error"

# UI runtime states
STATE_IDLE = "idle"
STATE_RUNNING = "running"
STATE_PAUSED = "paused"
STATE_ERROR = "error"

# Inbound commands sent by the web UI as {"command": ..., ...}
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_TOGGLE = "toggle"
COMMAND_RESET = "reset"
COMMAND_APPLY_PRESET = "apply_preset"
COMMAND_SET_CUSTOM_DURATIONS = "set_custom_durations"
COMMAND_ADD_TASK = "add_task"

COMMAND_NAMES: frozenset[str] = frozenset(
    {
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_TOGGLE,
        COMMAND_RESET,
        COMMAND_APPLY_PRESET,
        COMMAND_SET_CUSTOM_DURATIONS,
        COMMAND_ADD_TASK,
    }
)

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_STATE_UPDATE,
        EVENT_TIMER,
        EVENT_TASKS,
        EVENT_ERROR,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_TIMER,
    EVENT_TASKS,
    EVENT_ERROR,
    EVENT_STATE_UPDATE,
)
