import unittest

from pomodoro import PRESETS, Configuration, InvalidConfiguration, Phase, apply_preset


class ConfigurationTests(unittest.TestCase):
    def test_defaults_match_classic_pomodoro(self) -> None:
        configuration = Configuration()

        self.assertEqual(25 * 60 * 1000, configuration.duration_for(Phase.WORK))
        self.assertEqual(5 * 60 * 1000, configuration.duration_for(Phase.SHORT_BREAK))
        self.assertEqual(15 * 60 * 1000, configuration.duration_for(Phase.LONG_BREAK))
        self.assertEqual(4, configuration.long_break_every)

    def test_negative_duration_is_rejected(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            Configuration(short_break_duration_ms=-1)

    def test_non_integer_duration_is_rejected(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            Configuration(work_duration_ms="1500")  # type: ignore[arg-type]
        with self.assertRaises(InvalidConfiguration):
            Configuration(work_duration_ms=True)

    def test_cadence_below_one_is_rejected(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            Configuration(long_break_every=0)

    def test_zero_durations_are_allowed(self) -> None:
        configuration = Configuration(work_duration_ms=0)
        self.assertEqual(0, configuration.duration_for(Phase.WORK))

    def test_from_seconds_converts_to_milliseconds(self) -> None:
        configuration = Configuration.from_seconds(50, 10, 30, long_break_every=2)

        self.assertEqual(50000, configuration.work_duration_ms)
        self.assertEqual(10000, configuration.short_break_duration_ms)
        self.assertEqual(30000, configuration.long_break_duration_ms)
        self.assertEqual(2, configuration.long_break_every)

    def test_from_seconds_rejects_negative_values(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            Configuration.from_seconds(25, -5, 15)

    def test_with_durations_revalidates(self) -> None:
        configuration = Configuration()
        with self.assertRaises(InvalidConfiguration):
            configuration.with_durations(long_break_duration_ms=-10)

    def test_classic_preset_keeps_long_break(self) -> None:
        base = Configuration.from_seconds(10, 2, 42)

        configuration = apply_preset(base, "classic")

        self.assertEqual(25 * 60 * 1000, configuration.work_duration_ms)
        self.assertEqual(5 * 60 * 1000, configuration.short_break_duration_ms)
        self.assertEqual(42000, configuration.long_break_duration_ms)

    def test_extended_preset_overrides_all_durations(self) -> None:
        configuration = apply_preset(Configuration(long_break_every=3), " Extended ")

        self.assertEqual(50 * 60 * 1000, configuration.work_duration_ms)
        self.assertEqual(10 * 60 * 1000, configuration.short_break_duration_ms)
        self.assertEqual(30 * 60 * 1000, configuration.long_break_duration_ms)
        self.assertEqual(3, configuration.long_break_every)

    def test_unknown_preset_is_rejected(self) -> None:
        self.assertNotIn("custom", PRESETS)
        with self.assertRaises(InvalidConfiguration):
            apply_preset(Configuration(), "custom")


if __name__ == "__main__":
    unittest.main()
