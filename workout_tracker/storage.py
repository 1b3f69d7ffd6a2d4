"""
SQLite-backed persistence for the workout collection.

The whole collection lives as one JSON document under a single key, so every
write replaces the previous value (last write wins).
"""

import json
import logging
import os
import queue
import sqlite3
import threading
from contextlib import closing, contextmanager

from workout_tracker.workout_state import validate_collection


logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "workoutGroups"


class PersistenceLoadError(ValueError):
    """Raised when stored data cannot be decoded into a valid collection."""


class PersistenceWriteError(RuntimeError):
    """Raised when the collection could not be written to storage."""


class PersistenceReadError(RuntimeError):
    """Raised when the store itself could not be read (locked, I/O error)."""


def serialize_collection(collection):
    return json.dumps(collection, ensure_ascii=False, separators=(",", ":"))


def deserialize_collection(raw):
    """Decode and validate a stored collection.

    Raises:
        PersistenceLoadError: on malformed JSON or a shape mismatch
    """
    try:
        data = json.loads(raw)
        return validate_collection(data)
    except (TypeError, ValueError) as exc:
        raise PersistenceLoadError(f"Invalid stored collection: {exc}") from exc


class KeyValueStore:
    """Small SQLite wrapper holding string values by key."""

    def __init__(self, db_path):
        self.db_path = db_path
        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.init_schema()

    @contextmanager
    def connect(self):
        """Short-lived connection so reads and writes can come from any thread."""
        with closing(sqlite3.connect(self.db_path)) as conn:
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    def init_schema(self):
        with self.connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
                )
                """
            )

    def get(self, key):
        """Return the stored string for ``key`` or None."""
        with self.connect() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key, value):
        with self.connect() as conn:
            conn.execute(
                """
                INSERT INTO kv (key, value, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = datetime('now')
                """,
                (key, value),
            )


class WorkoutStorage:
    """Loads and saves the full collection under one fixed key."""

    def __init__(self, kv_store, key=DEFAULT_STORAGE_KEY):
        self.kv_store = kv_store
        self.key = key

    def load(self):
        """
        Read the persisted collection.

        Returns:
            The collection, or None when nothing is stored or the stored
            value cannot be decoded (logged).

        Raises:
            PersistenceReadError: when the store could not be read at all
        """
        try:
            raw = self.kv_store.get(self.key)
        except sqlite3.Error as exc:
            raise PersistenceReadError(f"Could not read {self.key} from storage: {exc}") from exc

        if raw is None:
            return None

        try:
            return deserialize_collection(raw)
        except PersistenceLoadError as exc:
            logger.warning("Discarding stored workouts: %s", exc)
            return None

    def save(self, collection):
        """
        Write the whole collection.

        Raises:
            PersistenceWriteError: when the underlying store fails
        """
        try:
            self.kv_store.set(self.key, serialize_collection(collection))
        except (sqlite3.Error, OSError, TypeError, ValueError) as exc:
            raise PersistenceWriteError(f"Could not save workouts: {exc}") from exc


class PersistenceWriter:
    """
    Applies collection writes on a dedicated thread, in submission order.

    ``submit`` returns immediately. A failed write is logged and dropped; the
    next submitted snapshot still carries the full current state.
    """

    _STOP = object()

    def __init__(self, storage):
        self.storage = storage
        self._queue = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="workout-writer", daemon=True)
        self._thread.start()

    def submit(self, collection):
        self._queue.put(collection)

    def flush(self):
        """Block until every submitted write has been attempted."""
        self._queue.join()

    def close(self):
        self._queue.put(self._STOP)
        self._thread.join()

    def _run(self):
        while True:
            item = self._queue.get()
            try:
                if item is self._STOP:
                    return
                self.storage.save(item)
            except PersistenceWriteError as exc:
                logger.error("%s", exc)
            finally:
                self._queue.task_done()


def open_storage(db_path, key=DEFAULT_STORAGE_KEY):
    """Build the default SQLite-backed WorkoutStorage."""
    return WorkoutStorage(KeyValueStore(db_path), key=key)
