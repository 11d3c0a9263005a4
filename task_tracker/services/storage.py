# task_tracker/services/storage.py

import logging
import threading
from typing import Callable, List, Optional

from ..errors import ConflictError, NotFoundError
from ..models import Task, advance_timestamp, utc_now_iso

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task collection owned by one Flask application.

    Every public method takes the lock, so each call is atomic even when
    the server handles requests on several threads. Nothing survives the
    process.
    """

    def __init__(self, clock: Callable[[], str] = utc_now_iso):
        self._clock = clock
        self._tasks: List[Task] = []
        self._lock = threading.RLock()

    def __len__(self):
        with self._lock:
            return len(self._tasks)

    def _index_of(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return -1

    def all_tasks(self) -> List[Task]:
        with self._lock:
            return list(self._tasks)

    def get_task(self, task_id: str) -> Optional[Task]:
        with self._lock:
            i = self._index_of(task_id)
            return self._tasks[i] if i != -1 else None

    def add_task(self, description: str, category, task_id: str = None) -> Task:
        with self._lock:
            if task_id is not None and self._index_of(task_id) != -1:
                raise ConflictError()
            task = Task.create(description, category, task_id=task_id, now=self._clock())
            self._tasks.append(task)
        logger.debug(f"Task added id={task.id} category={task.category.value}")
        return task

    def update_task(self, task_id: str, description: str = None, completed: bool = None) -> Task:
        changes = {}
        if description is not None:
            changes["description"] = description
        if completed is not None:
            changes["completed"] = completed

        with self._lock:
            i = self._index_of(task_id)
            if i == -1:
                raise NotFoundError()
            task = self._tasks[i]
            now = advance_timestamp(self._clock(), task.updated_at)
            self._tasks[i] = task.with_changes(now=now, **changes)
            return self._tasks[i]

    def delete_task(self, task_id: str) -> None:
        with self._lock:
            i = self._index_of(task_id)
            if i == -1:
                raise NotFoundError()
            del self._tasks[i]
        logger.debug(f"Task deleted id={task_id}")

    def clear(self) -> None:
        with self._lock:
            self._tasks = []
