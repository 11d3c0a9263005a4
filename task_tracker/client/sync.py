# task_tracker/client/sync.py

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from ..errors import ApiError, TransportError
from ..models import CATEGORIES, Category, Task, advance_timestamp, utc_now_iso
from .local_storage import LocalStorage, TaskMirror
from .outbox import CREATE, DELETE, UPDATE, Outbox, PendingOperation

logger = logging.getLogger(__name__)


class TaskSync:
    """
    Keeps the local task list, its persistent mirror and the remote service
    loosely in step.

    Local changes are applied and mirrored immediately; the matching remote
    call goes into the outbox and a background worker sends it. Remote
    failures are logged and never undo a local change. The operation stays
    queued and is sent again with the next flush.
    """

    def __init__(self, api, storage: LocalStorage, executor=None):
        self.api = api
        self.storage = storage
        self.mirror = TaskMirror(storage)
        self.outbox = Outbox(storage)
        self._executor = executor if executor is not None else ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="task-sync"
        )
        self._owns_executor = executor is None
        self._futures = []
        self._mounted = False

        self.tasks: List[Task] = self.mirror.load()
        self.loading = False
        self.error: Optional[str] = None

    # ---- state helpers ----

    def _set_tasks(self, tasks: List[Task]) -> None:
        self.tasks = tasks
        self.mirror.save(tasks)

    def _queue(self, op: PendingOperation) -> None:
        self.outbox.enqueue(op)
        self._dispatch_flush()

    def _dispatch_flush(self) -> None:
        future = self._executor.submit(self._flush_quietly)
        self._futures = [f for f in self._futures if not f.done()]
        self._futures.append(future)

    def _flush_quietly(self) -> None:
        try:
            self.outbox.replay(self.api)
        except Exception as e:
            logger.error(f"Background sync failed: {e}", exc_info=True)

    # ---- loading ----

    def mount(self) -> None:
        """Initial load; later calls do nothing."""
        if self._mounted:
            return
        self._mounted = True
        self.load_tasks()

    def load_tasks(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.wait()
            self.outbox.replay(self.api)
            tasks = self.api.list_tasks()
        except (TransportError, ApiError, ValueError) as e:
            logger.warning(f"Failed to sync with API, using local storage: {e}")
        else:
            self._set_tasks(self._merge_pending(tasks))
        finally:
            self.loading = False

    def _merge_pending(self, server_tasks: List[Task]) -> List[Task]:
        """Lay operations the server has not seen yet over its task list."""
        pending = self.outbox.pending()
        if not pending:
            return server_tasks

        local = {t.id: t for t in self.tasks}
        merged = {t.id: t for t in server_tasks}
        for op in pending:
            if op.kind == CREATE:
                if op.task_id not in merged and op.task_id in local:
                    merged[op.task_id] = local[op.task_id]
            elif op.kind == UPDATE:
                if op.task_id in merged:
                    merged[op.task_id] = local.get(op.task_id) or merged[op.task_id].with_changes(**op.payload)
            elif op.kind == DELETE:
                merged.pop(op.task_id, None)
        logger.info(f"Kept {len(pending)} unsent operation(s) on top of the server list")
        return list(merged.values())

    def flush(self) -> bool:
        """Send pending operations now. Returns True if nothing is left."""
        self.wait()
        return self.outbox.replay(self.api, blocking=True)

    # ---- mutations ----

    def add_task(self, description: str, category) -> Optional[Task]:
        if not isinstance(description, str) or not description.strip():
            self.error = "Description cannot be empty"
            return None
        if getattr(category, "value", category) not in CATEGORIES:
            self.error = f"Category must be one of: {', '.join(CATEGORIES)}"
            return None

        task = Task.create(description, category)
        self._set_tasks(self.tasks + [task])
        self.error = None

        self._queue(
            PendingOperation(
                CREATE,
                task.id,
                {"description": task.description, "category": task.category.value},
            )
        )
        return task

    def update_task(self, task_id: str, completed: bool) -> None:
        now = utc_now_iso()
        self._set_tasks(
            [
                t.with_changes(now=advance_timestamp(now, t.updated_at), completed=completed)
                if t.id == task_id
                else t
                for t in self.tasks
            ]
        )
        self.error = None
        self._queue(PendingOperation(UPDATE, task_id, {"completed": completed}))

    def delete_task(self, task_id: str) -> None:
        self._set_tasks([t for t in self.tasks if t.id != task_id])
        self.error = None
        self._queue(PendingOperation(DELETE, task_id))

    def clear_completed(self, category) -> List[str]:
        category = Category(getattr(category, "value", category))
        removed = [t.id for t in self.tasks if t.completed and t.category == category]
        if not removed:
            return []

        removed_ids = set(removed)
        self._set_tasks([t for t in self.tasks if t.id not in removed_ids])
        for task_id in removed:
            self.outbox.enqueue(PendingOperation(DELETE, task_id))
        self._dispatch_flush()
        return removed

    # ---- views ----

    def tasks_for(self, category) -> List[Task]:
        category = Category(getattr(category, "value", category))
        return [t for t in self.tasks if t.category == category]

    def counts(self) -> Dict[str, int]:
        return {c: len(self.tasks_for(c)) for c in CATEGORIES}

    def completed_count(self, category) -> int:
        return sum(1 for t in self.tasks_for(category) if t.completed)

    # ---- lifecycle ----

    def wait(self, timeout: float = None) -> None:
        """Block until every dispatched flush has finished."""
        for future in list(self._futures):
            future.result(timeout=timeout)
        self._futures = []

    def close(self) -> None:
        self.wait()
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        self.storage.close()
