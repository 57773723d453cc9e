import datetime as dt
import json
import unittest

from server.events import InvalidCommandMessage, StickyEventStore, make_event, parse_command


class ServerEventsTests(unittest.TestCase):
    def test_make_event_serializes_timestamp_and_payload(self) -> None:
        now = dt.datetime(2026, 2, 21, 10, 0, tzinfo=dt.timezone.utc)
        raw = make_event("timer", now_fn=lambda: now, phase="work", remaining_ms=1500)
        payload = json.loads(raw)

        self.assertEqual("timer", payload["type"])
        self.assertEqual(now.isoformat(), payload["timestamp"])
        self.assertEqual("work", payload["phase"])
        self.assertEqual(1500, payload["remaining_ms"])

    def test_parse_command_accepts_known_command(self) -> None:
        command = parse_command('{"command": "apply_preset", "preset": "classic"}')

        self.assertEqual({"command": "apply_preset", "preset": "classic"}, command)

    def test_parse_command_accepts_bytes(self) -> None:
        self.assertEqual("toggle", parse_command(b'{"command": "toggle"}')["command"])

    def test_parse_command_rejects_invalid_json(self) -> None:
        with self.assertRaises(InvalidCommandMessage):
            parse_command("{not json")

    def test_parse_command_rejects_non_object(self) -> None:
        with self.assertRaises(InvalidCommandMessage):
            parse_command('["start"]')

    def test_parse_command_rejects_unknown_command(self) -> None:
        with self.assertRaisesRegex(InvalidCommandMessage, "skip"):
            parse_command('{"command": "skip"}')

    def test_sticky_store_ignores_non_sticky_events(self) -> None:
        store = StickyEventStore()
        store.remember("hello", '{"type":"hello"}')
        store.remember("phase_completed", '{"type":"phase_completed"}')
        self.assertEqual([], store.snapshot())

    def test_sticky_store_snapshot_follows_stable_order(self) -> None:
        store = StickyEventStore()
        store.remember("state_update", '{"type":"state_update","n":1}')
        store.remember("error", '{"type":"error","n":2}')
        store.remember("tasks", '{"type":"tasks","n":3}')
        store.remember("timer", '{"type":"timer","n":4}')

        decoded_types = [json.loads(item)["type"] for item in store.snapshot()]
        self.assertEqual(["timer", "tasks", "error", "state_update"], decoded_types)

    def test_sticky_store_overwrites_latest_event_by_type(self) -> None:
        store = StickyEventStore()
        store.remember("timer", '{"type":"timer","remaining_ms":10000}')
        store.remember("timer", '{"type":"timer","remaining_ms":9000}')
        snapshot = store.snapshot()

        self.assertEqual(1, len(snapshot))
        self.assertEqual(9000, json.loads(snapshot[0])["remaining_ms"])


if __name__ == "__main__":
    unittest.main()
