import unittest

from pomodoro import Phase, next_phase, phase_sequence


class CycleRuleTests(unittest.TestCase):
    def test_work_is_followed_by_long_break_every_fourth_session(self) -> None:
        for completed in range(1, 13):
            expected = Phase.LONG_BREAK if completed % 4 == 0 else Phase.SHORT_BREAK
            with self.subTest(completed=completed):
                self.assertEqual(expected, next_phase(Phase.WORK, completed, 4))

    def test_breaks_always_return_to_work(self) -> None:
        for completed in (0, 1, 4, 7):
            with self.subTest(completed=completed):
                self.assertEqual(Phase.WORK, next_phase(Phase.SHORT_BREAK, completed, 4))
                self.assertEqual(Phase.WORK, next_phase(Phase.LONG_BREAK, completed, 4))

    def test_cadence_of_one_always_yields_long_break(self) -> None:
        self.assertEqual(Phase.LONG_BREAK, next_phase(Phase.WORK, 1, 1))
        self.assertEqual(Phase.LONG_BREAK, next_phase(Phase.WORK, 2, 1))

    def test_phase_sequence_previews_the_standard_cycle(self) -> None:
        phases = list(phase_sequence(Phase.WORK, 0, 4, 8))

        self.assertEqual(
            [
                Phase.SHORT_BREAK,
                Phase.WORK,
                Phase.SHORT_BREAK,
                Phase.WORK,
                Phase.SHORT_BREAK,
                Phase.WORK,
                Phase.LONG_BREAK,
                Phase.WORK,
            ],
            phases,
        )

    def test_phase_sequence_continues_from_current_count(self) -> None:
        phases = list(phase_sequence(Phase.WORK, 3, 4, 2))

        self.assertEqual([Phase.LONG_BREAK, Phase.WORK], phases)


if __name__ == "__main__":
    unittest.main()
