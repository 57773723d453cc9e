"""Pure phase-transition rules for the work/break cycle."""

from __future__ import annotations

from typing import Iterator

from .config import Phase


def next_phase(current: Phase, work_sessions_completed: int, cadence: int) -> Phase:
    """Return the phase that follows `current`.

    `work_sessions_completed` already counts the work session that just
    finished, so the 4th completed session with cadence 4 yields a long break.
    """
    if current is Phase.WORK:
        if work_sessions_completed % cadence == 0:
            return Phase.LONG_BREAK
        return Phase.SHORT_BREAK
    return Phase.WORK


def phase_sequence(
    start_phase: Phase,
    work_sessions_completed: int,
    cadence: int,
    count: int,
) -> Iterator[Phase]:
    """Yield the `count` phases that follow `start_phase`, assuming natural expiry."""
    phase = start_phase
    completed = work_sessions_completed
    for _ in range(count):
        if phase is Phase.WORK:
            completed += 1
        phase = next_phase(phase, completed, cadence)
        yield phase
