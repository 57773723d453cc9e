import logging
import unittest

from app_config_schema import AppConfig, LoggingSettings, TimerSettings, UIServerSettings
from pomodoro import Configuration, Phase, TickScheduler
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks


class _FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []
        self.states: list[tuple[str, str | None, dict[str, object]]] = []
        self.handler = None
        self.stopped = False

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))

    def publish_state(self, state: str, *, message=None, **payload):
        self.states.append((state, message, payload))

    def set_command_handler(self, handler):
        self.handler = handler

    def stop(self, timeout_seconds: float = 5.0):
        self.stopped = True


class RuntimeEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _FakeClock()
        self.scheduler = TickScheduler(clock=self.clock)
        self.ui_server = _UIServerStub()
        self.stop_callbacks = []
        self.stop_on_setup = False
        app_config = AppConfig(
            timer=TimerSettings(work_seconds=3, short_break_seconds=2, long_break_seconds=4),
            ui_server=UIServerSettings(enabled=False),
            logging=LoggingSettings(),
            source_file="config.toml",
        )
        self.runtime = RuntimeEngine(
            RuntimeBootstrap(
                logger=logging.getLogger("test.runtime"),
                app_config=app_config,
                configuration=Configuration.from_seconds(3, 2, 4),
                ui_server=self.ui_server,
                hooks=RuntimeHooks(setup_signal_handlers=self._setup_signal_handlers),
                scheduler=self.scheduler,
                poll_interval_seconds=0.0,
            )
        )

    def _setup_signal_handlers(self, request_stop) -> None:
        self.stop_callbacks.append(request_stop)
        if self.stop_on_setup:
            request_stop()

    def _events(self, event_type: str) -> list[dict[str, object]]:
        return [payload for kind, payload in self.ui_server.events if kind == event_type]

    def test_registers_command_handler_with_ui_server(self) -> None:
        self.assertEqual(self.runtime.submit_command, self.ui_server.handler)

    def test_queued_command_is_applied_on_next_iteration(self) -> None:
        self.ui_server.handler({"command": "start"})
        self.assertFalse(self.runtime.timer.is_running)

        self.runtime.run_once()

        self.assertTrue(self.runtime.timer.is_running)
        self.assertEqual("running", self.ui_server.states[-1][0])

    def test_ticks_publish_timer_events_and_phase_completion(self) -> None:
        self.runtime.submit_command({"command": "start"})
        self.runtime.run_once()

        for _ in range(3):
            self.clock.now += 1.0
            self.runtime.run_once()

        timer_events = self._events("timer")
        self.assertEqual(
            ["started", "tick", "tick", "expired", "transition"],
            [event["reason"] for event in timer_events],
        )
        self.assertEqual("00:02", timer_events[1]["remaining_text"])
        self.assertEqual(67, timer_events[1]["progress_percent"])
        self.assertEqual("short_break", timer_events[-1]["phase"])

        completed = self._events("phase_completed")
        self.assertEqual(1, len(completed))
        self.assertEqual("short_break", completed[0]["phase"])
        self.assertEqual(1, completed[0]["work_sessions_completed"])

    def test_run_stops_when_requested_and_shuts_down(self) -> None:
        self.stop_on_setup = True

        exit_code = self.runtime.run()

        self.assertEqual(0, exit_code)
        self.assertTrue(self.runtime.timer.closed)
        self.assertTrue(self.ui_server.stopped)
        self.assertIsNone(self.ui_server.handler)
        self.assertEqual(0, self.scheduler.pending)
        startup_timer = self._events("timer")[0]
        self.assertEqual("sync", startup_timer["reason"])
        self.assertEqual([], self._events("tasks")[0]["tasks"])

    def test_zero_length_work_phase_completes_on_start(self) -> None:
        self.runtime.timer.set_phase_and_durations(Configuration.from_seconds(0, 2, 4))

        self.runtime.submit_command({"command": "start"})
        self.runtime.run_once()

        snapshot = self.runtime.timer.snapshot()
        self.assertEqual(Phase.SHORT_BREAK, snapshot.phase)
        self.assertEqual(1, len(self._events("phase_completed")))


if __name__ == "__main__":
    unittest.main()
