"""
Owner of the in-memory workout collection.

All writes go through the mutator methods below. Each one swaps in a new
collection under a lock, hands the snapshot to the on-commit hook and then
notifies subscribers.
"""

import logging
import threading
import time

from workout_tracker import workout_state
from workout_tracker.storage import PersistenceReadError, PersistenceWriteError


logger = logging.getLogger(__name__)


def _save_now(storage):
    """Synchronous on-commit hook that logs write failures."""

    def save(collection):
        try:
            storage.save(collection)
        except PersistenceWriteError as exc:
            logger.error("%s", exc)

    return save


class WorkoutStore:
    """Single-writer state holder for the workout collection."""

    def __init__(self, collection=None, on_commit=None):
        """
        Args:
            collection: Initial collection (not committed, not notified)
            on_commit: Callable receiving every new collection, typically
                ``PersistenceWriter.submit``
        """
        self._collection = list(collection or [])
        self._on_commit = on_commit
        self._subscribers = []
        self._lock = threading.RLock()
        self.revision = 0

    @classmethod
    def open(cls, storage, writer=None, today=None, read_attempts=3, retry_delay=0.2):
        """
        Load the persisted collection, seeding example groups on first run.

        A loaded collection is not written back. A seeded one is committed
        once so it survives the next restart. When the store stays unreadable
        after ``read_attempts`` tries, the seed is held in memory only.
        """
        on_commit = writer.submit if writer is not None else _save_now(storage)

        for attempt in range(1, read_attempts + 1):
            try:
                collection = storage.load()
                break
            except PersistenceReadError as exc:
                logger.warning("%s (attempt %d/%d)", exc, attempt, read_attempts)
                if attempt < read_attempts:
                    time.sleep(retry_delay)
        else:
            logger.error("Storage unreadable, showing example groups without saving them")
            return cls(workout_state.seed_collection(today=today), on_commit=on_commit)

        if collection is not None:
            logger.info("Loaded %d workout group(s) from storage", len(collection))
            return cls(collection, on_commit=on_commit)

        logger.info("No stored workouts found, seeding example groups")
        store = cls(on_commit=on_commit)
        store._commit(workout_state.seed_collection(today=today))
        return store

    @property
    def collection(self):
        return self._collection

    def subscribe(self, callback):
        """Register ``callback(collection)``; returns an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _commit(self, new_collection):
        with self._lock:
            self._collection = new_collection
            self.revision += 1
            subscribers = list(self._subscribers)
            if self._on_commit is not None:
                self._on_commit(new_collection)

        for callback in subscribers:
            callback(new_collection)
        return new_collection

    def _apply(self, mutator, *args, **kwargs):
        with self._lock:
            return self._commit(mutator(self._collection, *args, **kwargs))

    def add_group(self, name, initial_exercises=None, today=None):
        return self._apply(workout_state.add_group, name, initial_exercises, today=today)

    def delete_group(self, group_id):
        return self._apply(workout_state.delete_group, group_id)

    def rename_group(self, group_id, new_name):
        return self._apply(workout_state.rename_group, group_id, new_name)

    def add_exercise(self, group_id, exercise_spec, today=None):
        return self._apply(workout_state.add_exercise, group_id, exercise_spec, today=today)

    def delete_exercise(self, group_id, exercise_id):
        return self._apply(workout_state.delete_exercise, group_id, exercise_id)

    def update_exercise(self, group_id, updated_exercise):
        return self._apply(workout_state.update_exercise, group_id, updated_exercise)

    def append_weight(self, group_id, exercise_id, weight, today=None):
        return self._apply(workout_state.append_weight, group_id, exercise_id, weight, today=today)
