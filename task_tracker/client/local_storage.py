# task_tracker/client/local_storage.py

import json
import logging
import os
import sqlite3
import threading
from typing import List, Optional

from ..models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


class LocalStorage:
    """
    Durable key-value store backed by a single SQLite table.

    Values are text; callers serialise them. One connection is kept for the
    lifetime of the object and shared between threads under a lock.
    """

    def __init__(self, path: str = ":memory:"):
        if path != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        self.path = path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS storage (
                key TEXT PRIMARY KEY,
                value TEXT
            )
            """
        )
        self._conn.commit()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            row = self._conn.execute("SELECT value FROM storage WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._conn.execute(
                """
                INSERT INTO storage (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )
            self._conn.commit()

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM storage WHERE key = ?", (key,))
            self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()


class TaskMirror:
    """Full task collection mirrored under one storage key as a JSON array."""

    def __init__(self, storage: LocalStorage, key: str = TASKS_KEY):
        self.storage = storage
        self.key = key

    def save(self, tasks: List[Task]) -> None:
        self.storage.set_item(self.key, json.dumps([t.to_dict() for t in tasks]))

    def load(self) -> List[Task]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError("expected a JSON array")
            return [Task.from_dict(item) for item in items]
        except ValueError as e:
            logger.warning(f"Ignoring unreadable '{self.key}' entry in local storage: {e}")
            return []

    def clear(self) -> None:
        self.storage.remove_item(self.key)
