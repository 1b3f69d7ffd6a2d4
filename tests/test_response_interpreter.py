import unittest
from unittest.mock import MagicMock

from workout_tracker.response_interpreter import (
    PlainMessage,
    StructuredCreate,
    apply_response,
    confirmation_text,
    interpret_response,
)


class InterpretResponseTests(unittest.TestCase):
    def test_structured_create(self):
        raw = '{"groupName":"Push Day","exercises":[{"name":"Bench","sets":"4","reps":"8"}]}'
        response = interpret_response(raw)

        self.assertIsInstance(response, StructuredCreate)
        self.assertEqual(response.group_name, "Push Day")
        self.assertEqual(response.exercises, [{"name": "Bench", "sets": "4", "reps": "8"}])

    def test_prose_is_plain_message(self):
        raw = "Sure, here's how to do squats..."
        self.assertEqual(interpret_response(raw), PlainMessage(raw))

    def test_missing_exercises_is_plain_message(self):
        raw = '{"groupName":"X"}'
        self.assertEqual(interpret_response(raw), PlainMessage(raw))

    def test_missing_group_name_is_plain_message(self):
        raw = '{"exercises":[]}'
        self.assertEqual(interpret_response(raw), PlainMessage(raw))

    def test_blank_group_name_is_plain_message(self):
        raw = '{"groupName":"  ","exercises":[]}'
        self.assertEqual(interpret_response(raw), PlainMessage(raw))

    def test_non_object_json_is_plain_message(self):
        for raw in ("42", '"text"', "[1, 2]", "null"):
            self.assertEqual(interpret_response(raw), PlainMessage(raw))

    def test_exercises_must_be_objects(self):
        raw = '{"groupName":"X","exercises":["Bench"]}'
        self.assertEqual(interpret_response(raw), PlainMessage(raw))

    def test_mixed_prose_and_json_is_plain_message(self):
        raw = 'Here you go: {"groupName":"X","exercises":[]}'
        self.assertEqual(interpret_response(raw), PlainMessage(raw))

    def test_empty_exercise_list_is_still_structured(self):
        response = interpret_response('{"groupName":"Rest Day","exercises":[]}')
        self.assertEqual(response, StructuredCreate("Rest Day", []))

    def test_whole_reply_fenced_block_is_unwrapped(self):
        raw = '```json\n{"groupName":"Back","exercises":[{"name":"Row","sets":4,"reps":10}]}\n```'
        response = interpret_response(raw)
        self.assertIsInstance(response, StructuredCreate)
        self.assertEqual(response.exercises, [{"name": "Row", "sets": "4", "reps": "10"}])

    def test_surrounding_whitespace_is_ignored(self):
        raw = '\n  {"groupName":"Back","exercises":[]}  \n'
        self.assertIsInstance(interpret_response(raw), StructuredCreate)

    def test_plain_message_keeps_raw_text_verbatim(self):
        raw = "  Line one\n\nLine two  "
        self.assertEqual(interpret_response(raw).text, raw)

    def test_deeply_nested_json_is_plain_message(self):
        raw = "[" * 100000 + "]" * 100000
        response = interpret_response(raw)
        self.assertIsInstance(response, PlainMessage)
        self.assertEqual(response.text, raw)


class ApplyResponseTests(unittest.TestCase):
    def test_structured_create_adds_group_and_confirms(self):
        store = MagicMock()
        exercises = [{"name": "Bench", "sets": "4", "reps": "8"}]

        message = apply_response(store, StructuredCreate("Push Day", exercises))

        store.add_group.assert_called_once_with("Push Day", exercises)
        self.assertEqual(message, PlainMessage(confirmation_text("Push Day")))
        self.assertIn('"Push Day"', message.text)

    def test_plain_message_passes_through(self):
        store = MagicMock()
        message = PlainMessage("Drink water.")
        self.assertIs(apply_response(store, message), message)
        store.add_group.assert_not_called()


if __name__ == "__main__":
    unittest.main()
