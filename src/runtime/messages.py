"""Status and notification text builders for timer updates."""

from __future__ import annotations

from pomodoro import Phase, TimerSnapshot, format_remaining

PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK: "Focus",
    Phase.SHORT_BREAK: "Short break",
    Phase.LONG_BREAK: "Long break",
}


def timer_status_message(snapshot: TimerSnapshot) -> str:
    """Build the status line shown under the countdown."""
    label = PHASE_LABELS[snapshot.phase]
    remaining = format_remaining(snapshot.remaining_ms)
    if snapshot.is_running:
        return f"{label} running ({remaining} remaining)"
    if snapshot.remaining_ms < snapshot.duration_ms:
        return f"{label} paused ({remaining} remaining)"
    return f"{label} ready ({remaining})"


def phase_completed_message(snapshot: TimerSnapshot) -> str:
    """Announce the phase that starts after an expiry."""
    if snapshot.phase is Phase.WORK:
        return "Break is over, back to focus."
    sessions = snapshot.work_sessions_completed
    plural = "" if sessions == 1 else "s"
    return (
        f"{sessions} focus session{plural} done. "
        f"Time for a {PHASE_LABELS[snapshot.phase].lower()}."
    )
