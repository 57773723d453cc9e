"""Render-side projections of timer snapshots."""

from __future__ import annotations

from .config import Configuration
from .engine import TimerSnapshot


def progress_percent(snapshot: TimerSnapshot, configuration: Configuration) -> int:
    """Share of the phase still remaining, as an integer in [0, 100].

    A zero-length phase has nothing left to show and reports 0.
    """
    duration = configuration.duration_for(snapshot.phase)
    if duration <= 0:
        return 0
    percent = round(snapshot.remaining_ms / duration * 100)
    return max(0, min(100, percent))


def format_remaining(remaining_ms: int) -> str:
    """Format remaining milliseconds as `MM:SS`."""
    minutes, seconds = divmod(max(0, int(remaining_ms)) // 1000, 60)
    return f"{minutes:02d}:{seconds:02d}"
