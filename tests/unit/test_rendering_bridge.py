import json
import queue
import unittest

from sheet_gen.bridge import RenderingBridge, RenderState, decode_payload
from sheet_gen.bridge.messages import RenderEvent
from sheet_gen.config import RenderConfig
from sheet_gen.domain import RenderStatus
from sheet_gen.infrastructure.interfaces import RenderContext


class FakeRenderContext(RenderContext):
    def __init__(self):
        self.sent = []
        self.events = queue.Queue()
        self.started = 0
        self.closed = False

    def start(self):
        self.started += 1

    def send(self, message):
        self.sent.append(json.loads(message))

    def receive(self, timeout):
        try:
            return self.events.get_nowait()
        except queue.Empty:
            return None

    def close(self):
        self.closed = True

    def post(self, **fields):
        self.events.put(RenderEvent(**fields).model_dump_json())


class TestRenderingBridge(unittest.TestCase):
    def setUp(self):
        self.context = FakeRenderContext()
        self.bridge = RenderingBridge(self.context, RenderConfig(render_timeout_seconds=0.05))

    def test_present_sends_encoded_load_command(self):
        document = "<score-partwise>`${evil}`</score-partwise>"
        attempt_id = self.bridge.present(document)

        self.assertEqual(attempt_id, 1)
        self.assertIs(self.bridge.view.state, RenderState.LOADING)
        command = self.context.sent[-1]
        self.assertEqual(command["type"], "load")
        self.assertEqual(command["attempt_id"], 1)
        self.assertNotIn("`", command["payload"])
        self.assertEqual(decode_payload(command["payload"]), document)

    def test_success_outcome(self):
        self.bridge.present("<score-partwise/>")
        self.context.post(type="success", attempt_id=1, surface="/tmp/score.musicxml")

        outcome = self.bridge.wait_for_outcome()

        self.assertIs(outcome.status, RenderStatus.SUCCESS)
        self.assertTrue(self.bridge.view.shows_score)
        self.assertEqual(self.bridge.view.surface, "/tmp/score.musicxml")
        self.assertIsNone(self.bridge.view.error_message)

    def test_error_outcome_replaces_score(self):
        self.bridge.present("<score-partwise/>")
        self.context.post(type="error", attempt_id=1, message="Invalid XML", stage="load")

        outcome = self.bridge.wait_for_outcome()

        self.assertIs(outcome.status, RenderStatus.ERROR)
        view = self.bridge.view
        self.assertIs(view.state, RenderState.ERRORED)
        self.assertEqual(view.error_message, "Invalid XML")
        self.assertEqual(view.error_stage, "load")
        self.assertFalse(view.shows_score)
        self.assertIsNone(view.surface)

    def test_duplicate_and_conflicting_events_are_ignored(self):
        self.bridge.present("<score-partwise/>")
        error = RenderEvent(type="error", attempt_id=1, message="Invalid XML").model_dump_json()

        first = self.bridge.apply_event(error)
        second = self.bridge.apply_event(error)
        late_success = self.bridge.apply_event(
            RenderEvent(type="success", attempt_id=1).model_dump_json()
        )

        self.assertEqual(first, second)
        self.assertEqual(first, late_success)
        self.assertEqual(self.bridge.view.error_message, "Invalid XML")
        self.assertFalse(self.bridge.view.shows_score)

    def test_events_for_older_attempts_are_ignored(self):
        self.bridge.present("<score-partwise/>")
        self.bridge.present("<score-partwise><part-list/></score-partwise>")

        view = self.bridge.apply_event(RenderEvent(type="success", attempt_id=1).model_dump_json())
        self.assertIs(view.state, RenderState.LOADING)
        self.assertEqual(view.attempt_id, 2)

        view = self.bridge.apply_event(RenderEvent(type="success", attempt_id=2).model_dump_json())
        self.assertIs(view.state, RenderState.RENDERED)

    def test_malformed_event_is_ignored(self):
        self.bridge.present("<score-partwise/>")
        view = self.bridge.apply_event('{"type": "exploded"}')
        self.assertIs(view.state, RenderState.LOADING)
        view = self.bridge.apply_event("not json at all")
        self.assertIs(view.state, RenderState.LOADING)

    def test_silent_renderer_times_out(self):
        self.bridge.present("<score-partwise/>")

        outcome = self.bridge.wait_for_outcome()

        self.assertIs(outcome.status, RenderStatus.ERROR)
        self.assertEqual(outcome.stage, "timeout")
        self.assertIs(self.bridge.view.state, RenderState.ERRORED)
        self.assertNotEqual(self.bridge.view.state, RenderState.LOADING)

        self.bridge.apply_event(RenderEvent(type="success", attempt_id=1).model_dump_json())
        self.assertIs(self.bridge.view.state, RenderState.ERRORED)

    def test_failed_send_errors_the_attempt(self):
        class UnstartableContext(FakeRenderContext):
            def send(self, message):
                raise OSError("renderer process could not be spawned")

        bridge = RenderingBridge(UnstartableContext(), RenderConfig())

        with self.assertRaises(OSError):
            bridge.present("<score-partwise/>")

        view = bridge.view
        self.assertIs(view.state, RenderState.ERRORED)
        self.assertEqual(view.error_stage, "unknown")
        self.assertIn("could not be spawned", view.error_message)
        self.assertIs(bridge.wait_for_outcome().status, RenderStatus.ERROR)

    def test_new_attempt_after_error(self):
        self.bridge.present("broken")
        self.bridge.apply_event(
            RenderEvent(type="error", attempt_id=1, message="Invalid XML").model_dump_json()
        )

        self.bridge.present("<score-partwise/>")
        self.assertIs(self.bridge.view.state, RenderState.LOADING)
        self.assertIsNone(self.bridge.view.error_message)
        self.assertIsNone(self.bridge.outcome)

    def test_invalid_usage(self):
        with self.assertRaises(RuntimeError):
            self.bridge.wait_for_outcome()
        with self.assertRaises(ValueError):
            self.bridge.present("   ")

    def test_close_closes_context(self):
        self.bridge.close()
        self.assertTrue(self.context.closed)


if __name__ == "__main__":
    unittest.main()
