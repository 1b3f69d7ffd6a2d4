import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import MagicMock

from main import format_collection, format_exercise_history, handle_command


COLLECTION = [
    {
        "id": "group-1",
        "name": "Leg Day",
        "exercises": [
            {
                "id": "ex-1",
                "name": "Back Squat",
                "sets": "4",
                "reps": "10",
                "currentTargetWeight": "85",
                "history": [
                    {"date": "2026-10-01", "weight": "80"},
                    {"date": "2026-10-15", "weight": "85"},
                    {"date": "2026-09-20", "weight": "75"},
                ],
            }
        ],
    },
    {"id": "group-2", "name": "Push Day", "exercises": []},
]


class FormatTests(unittest.TestCase):
    def test_format_collection(self):
        output = format_collection(COLLECTION)
        self.assertIn("■ Leg Day", output)
        self.assertIn("- Back Squat: 4 x 10 @ 85 kg", output)
        self.assertIn("(no exercises)", output)

    def test_format_empty_collection(self):
        self.assertIn("No workout groups yet", format_collection([]))

    def test_history_is_newest_first(self):
        output = format_exercise_history(COLLECTION, "squat")
        dates = [line.split()[0] for line in output.splitlines()[1:]]
        self.assertEqual(dates, ["2026-10-15", "2026-10-01", "2026-09-20"])

    def test_history_without_match(self):
        self.assertEqual(format_exercise_history(COLLECTION, "curl"), "No exercise matching 'curl'.")


class HandleCommandTests(unittest.TestCase):
    def setUp(self):
        self.store = MagicMock()
        self.store.collection = COLLECTION

    def test_quit(self):
        self.assertFalse(handle_command("/quit", self.store))

    def test_list_prints_groups(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            self.assertTrue(handle_command("/list", self.store))
        self.assertIn("Leg Day", buffer.getvalue())

    def test_history_command(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            handle_command("/history Back Squat", self.store)
        self.assertIn("2026-10-15  85 kg", buffer.getvalue())

    def test_unknown_command_prints_help(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            handle_command("/dance", self.store)
        self.assertIn("Commands:", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
