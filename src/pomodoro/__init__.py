from .config import PRESETS, Configuration, Phase, apply_preset
from .cycle import next_phase, phase_sequence
from .engine import TimerEngine, TimerSnapshot
from .errors import (
    DegenerateConfiguration,
    EngineClosed,
    InvalidConfiguration,
    TickSourceError,
    TimerEngineError,
)
from .progress import format_remaining, progress_percent
from .scheduler import TickHandle, TickScheduler

__all__ = [
    "PRESETS",
    "Configuration",
    "DegenerateConfiguration",
    "EngineClosed",
    "InvalidConfiguration",
    "Phase",
    "TickHandle",
    "TickScheduler",
    "TickSourceError",
    "TimerEngine",
    "TimerEngineError",
    "TimerSnapshot",
    "apply_preset",
    "format_remaining",
    "next_phase",
    "phase_sequence",
    "progress_percent",
]
