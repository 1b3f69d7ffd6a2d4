import os
import tempfile
import unittest
from unittest.mock import patch

from workout_tracker.storage import open_storage
from workout_tracker.ui_utils import open_workout_store, should_show_save_toast


class OpenWorkoutStoreTest(unittest.TestCase):
    def test_writer_is_closed_at_exit_and_pending_writes_land(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            db_path = os.path.join(temp_dir, "workouts.db")
            config = {"storage": {"path": db_path, "key": "workoutGroups"}}

            with patch("workout_tracker.ui_utils.atexit.register") as register:
                store = open_workout_store(config)

            register.assert_called_once()
            close_writer = register.call_args[0][0]

            store.add_group("Pull Day")
            close_writer()

            saved = open_storage(db_path).load()
            self.assertEqual(saved[-1]["name"], "Pull Day")


class SaveToastTest(unittest.TestCase):
    def test_initial_load_never_toasts(self):
        self.assertFalse(should_show_save_toast(0, 0))

    def test_new_revision_toasts_once(self):
        self.assertTrue(should_show_save_toast(3, 2))
        self.assertFalse(should_show_save_toast(3, 3))


if __name__ == "__main__":
    unittest.main()
