import threading
import unittest
from unittest.mock import MagicMock

from workout_tracker.assistant_client import AssistantRequestError, EmptyReplyError
from workout_tracker.chat_session import (
    ASSISTANT_ROLE,
    EMPTY_REPLY_MESSAGE,
    GREETING,
    REQUEST_FAILED_MESSAGE,
    USER_ROLE,
    ChatSession,
)
from workout_tracker.response_interpreter import confirmation_text
from workout_tracker.workout_store import WorkoutStore


class ChatSessionTests(unittest.TestCase):
    def setUp(self):
        self.store = WorkoutStore(
            [{"id": "group-1", "name": "Leg Day", "exercises": []}],
            on_commit=lambda collection: None,
        )
        self.assistant = MagicMock()
        self.session = ChatSession(self.assistant, self.store)

    def test_starts_with_greeting_only(self):
        self.assertEqual(self.session.messages, [{"role": ASSISTANT_ROLE, "text": GREETING}])
        self.assertEqual(self.session.copyable_messages(), [])

    def test_plain_reply_is_appended_after_user_message(self):
        self.assistant.generate.return_value = "Squat with a neutral spine."

        result = self.session.send("How do I squat?")

        self.assertEqual(
            self.session.messages[1:],
            [
                {"role": USER_ROLE, "text": "How do I squat?"},
                {"role": ASSISTANT_ROLE, "text": "Squat with a neutral spine."},
            ],
        )
        self.assertFalse(result.switch_to_workouts)
        self.assertEqual(result.reply["text"], "Squat with a neutral spine.")
        self.assertFalse(self.session.is_busy())

    def test_system_instruction_contains_workout_names(self):
        self.assistant.generate.return_value = "ok"
        self.session.send("Explain my Leg Day")

        user_text, system_instruction = self.assistant.generate.call_args[0]
        self.assertEqual(user_text, "Explain my Leg Day")
        self.assertIn('"Leg Day"', system_instruction)
        self.assertIn('"groupName"', system_instruction)
        self.assertIn("https://www.youtube.com/watch?v=VIDEO_ID", system_instruction)

    def test_structured_reply_creates_group_and_confirms(self):
        self.assistant.generate.return_value = (
            '{"groupName":"Push Day","exercises":[{"name":"Bench","sets":"4","reps":"8"}]}'
        )

        result = self.session.send("Create a push workout")

        self.assertTrue(result.switch_to_workouts)
        self.assertEqual(result.created_group, "Push Day")
        self.assertEqual(self.session.messages[-1]["text"], confirmation_text("Push Day"))
        created = self.store.collection[-1]
        self.assertEqual(created["name"], "Push Day")
        self.assertEqual(created["exercises"][0]["name"], "Bench")
        self.assertEqual(created["exercises"][0]["currentTargetWeight"], "0")

    def test_request_failure_appends_apology_and_releases_lock(self):
        self.assistant.generate.side_effect = AssistantRequestError("connection reset")

        with self.assertLogs("workout_tracker.chat_session", level="WARNING"):
            result = self.session.send("Hello")

        self.assertEqual(result.reply, {"role": ASSISTANT_ROLE, "text": REQUEST_FAILED_MESSAGE})
        self.assertFalse(self.session.is_busy())

        self.assistant.generate.side_effect = None
        self.assistant.generate.return_value = "Back online."
        self.assertIsNotNone(self.session.send("Hello again"))
        self.assertEqual(self.session.messages[-1]["text"], "Back online.")

    def test_unexpected_collaborator_error_appends_apology(self):
        self.assistant.generate.side_effect = ConnectionError("boom")

        with self.assertLogs("workout_tracker.chat_session", level="ERROR"):
            result = self.session.send("hi")

        self.assertEqual(result.reply, {"role": ASSISTANT_ROLE, "text": REQUEST_FAILED_MESSAGE})
        self.assertEqual(
            [m["text"] for m in self.session.messages[1:]],
            ["hi", REQUEST_FAILED_MESSAGE],
        )
        self.assertFalse(self.session.is_busy())

    def test_deeply_nested_reply_is_shown_as_text(self):
        raw = "[" * 100000 + "]" * 100000
        self.assistant.generate.return_value = raw

        result = self.session.send("hi")

        self.assertEqual(result.reply["text"], raw)
        self.assertFalse(result.switch_to_workouts)

    def test_empty_reply_appends_apology(self):
        self.assistant.generate.side_effect = EmptyReplyError("empty")
        result = self.session.send("Hello")
        self.assertEqual(result.reply["text"], EMPTY_REPLY_MESSAGE)
        self.assertEqual(len(self.session.messages), 3)

    def test_blank_text_is_rejected(self):
        self.assertIsNone(self.session.send("   "))
        self.assertIsNone(self.session.send(""))
        self.assertEqual(len(self.session.messages), 1)
        self.assistant.generate.assert_not_called()

    def test_send_while_in_flight_is_rejected(self):
        started = threading.Event()
        release = threading.Event()

        def slow_generate(user_text, system_instruction):
            started.set()
            release.wait(5)
            return "done"

        self.assistant.generate.side_effect = slow_generate
        worker = threading.Thread(target=self.session.send, args=("first",))
        worker.start()
        self.assertTrue(started.wait(5))

        self.assertTrue(self.session.is_busy())
        history_length = len(self.session.messages)
        self.assertIsNone(self.session.send("second"))
        self.assertEqual(len(self.session.messages), history_length)

        release.set()
        worker.join(5)
        self.assertFalse(self.session.is_busy())
        self.assertEqual(
            [m["text"] for m in self.session.messages[1:]],
            ["first", "done"],
        )

    def test_store_stays_writable_while_request_is_pending(self):
        def generate(user_text, system_instruction):
            self.store.add_group("Manual Group")
            return "ok"

        self.assistant.generate.side_effect = generate
        self.session.send("hi")
        self.assertEqual(self.store.collection[-1]["name"], "Manual Group")

    def test_copyable_messages_skip_greeting_and_user_turns(self):
        self.assistant.generate.return_value = "Answer"
        self.session.send("Question")
        self.assertEqual(
            self.session.copyable_messages(),
            [(2, {"role": ASSISTANT_ROLE, "text": "Answer"})],
        )

    def test_reset(self):
        self.assistant.generate.return_value = "Answer"
        self.session.send("Question")
        self.assertTrue(self.session.reset())
        self.assertEqual(len(self.session.messages), 1)


if __name__ == "__main__":
    unittest.main()
