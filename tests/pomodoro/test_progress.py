import unittest

from pomodoro import Configuration, Phase, TimerSnapshot, format_remaining, progress_percent


def _snapshot(phase: Phase, remaining_ms: int, duration_ms: int) -> TimerSnapshot:
    return TimerSnapshot(
        phase=phase,
        remaining_ms=remaining_ms,
        is_running=True,
        work_sessions_completed=0,
        duration_ms=duration_ms,
    )


class ProgressTests(unittest.TestCase):
    def test_progress_is_share_of_remaining_time(self) -> None:
        configuration = Configuration(work_duration_ms=25000)

        self.assertEqual(100, progress_percent(_snapshot(Phase.WORK, 25000, 25000), configuration))
        self.assertEqual(60, progress_percent(_snapshot(Phase.WORK, 15000, 25000), configuration))
        self.assertEqual(0, progress_percent(_snapshot(Phase.WORK, 0, 25000), configuration))

    def test_progress_rounds_to_nearest_percent(self) -> None:
        configuration = Configuration(short_break_duration_ms=3000)

        self.assertEqual(67, progress_percent(_snapshot(Phase.SHORT_BREAK, 2000, 3000), configuration))

    def test_progress_clamps_after_shorter_reconfiguration(self) -> None:
        configuration = Configuration(work_duration_ms=10000)

        self.assertEqual(100, progress_percent(_snapshot(Phase.WORK, 20000, 25000), configuration))

    def test_zero_length_phase_reports_zero(self) -> None:
        configuration = Configuration(long_break_duration_ms=0)

        self.assertEqual(0, progress_percent(_snapshot(Phase.LONG_BREAK, 0, 0), configuration))

    def test_format_remaining(self) -> None:
        self.assertEqual("25:00", format_remaining(25 * 60 * 1000))
        self.assertEqual("00:59", format_remaining(59999))
        self.assertEqual("00:00", format_remaining(-5))


if __name__ == "__main__":
    unittest.main()
