# task_tracker/client/outbox.py

import json
import logging
import threading
from dataclasses import asdict, dataclass, field
from typing import List

from ..errors import ApiError, TransportError
from .local_storage import LocalStorage

logger = logging.getLogger(__name__)

OUTBOX_KEY = "outbox"

CREATE = "create"
UPDATE = "update"
DELETE = "delete"


@dataclass
class PendingOperation:
    kind: str
    task_id: str
    payload: dict = field(default_factory=dict)

    def apply(self, api) -> None:
        if self.kind == CREATE:
            api.create_task(self.payload["description"], self.payload["category"], task_id=self.task_id)
        elif self.kind == UPDATE:
            api.update_task(self.task_id, **self.payload)
        elif self.kind == DELETE:
            api.delete_task(self.task_id)
        else:
            raise ValueError(f"Unknown operation kind: {self.kind}")

    def describe(self) -> str:
        return f"{self.kind} {self.task_id}"


class Outbox:
    """
    FIFO of remote operations that have not reached the server yet.

    The queue is persisted after every change so pending work survives a
    restart. Operations are keyed by the task id the client generated,
    which makes replaying them safe: a create the server already has
    answers 409 and a delete it already applied answers 404.
    """

    def __init__(self, storage: LocalStorage, key: str = OUTBOX_KEY):
        self.storage = storage
        self.key = key
        self._lock = threading.Lock()
        self._replay_lock = threading.Lock()
        self._ops: List[PendingOperation] = self._load()

    def _load(self) -> List[PendingOperation]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []
        try:
            return [PendingOperation(**item) for item in json.loads(raw)]
        except (ValueError, TypeError) as e:
            logger.warning(f"Discarding unreadable outbox: {e}")
            return []

    def _persist(self) -> None:
        self.storage.set_item(self.key, json.dumps([asdict(op) for op in self._ops]))

    def __len__(self):
        with self._lock:
            return len(self._ops)

    def pending(self) -> List[PendingOperation]:
        with self._lock:
            return list(self._ops)

    def enqueue(self, op: PendingOperation) -> None:
        with self._lock:
            self._ops.append(op)
            self._persist()

    def _pop(self, op: PendingOperation) -> None:
        with self._lock:
            if self._ops and self._ops[0] is op:
                self._ops.pop(0)
                self._persist()

    def replay(self, api, blocking: bool = False) -> bool:
        """
        Send pending operations in order until the queue is empty or the
        server stops answering. Returns True when nothing is left pending.

        With blocking=False a replay already in progress makes this call
        return False at once; with blocking=True it waits for that replay.
        """
        if not self._replay_lock.acquire(blocking=blocking):
            logger.debug("Outbox replay already running")
            return False
        try:
            sent = 0
            while True:
                with self._lock:
                    if not self._ops:
                        break
                    op = self._ops[0]
                try:
                    op.apply(api)
                except TransportError as e:
                    logger.warning(f"Task service unreachable, {len(self)} operation(s) kept: {e}")
                    return False
                except ApiError as e:
                    if e.status_code >= 500:
                        logger.error(f"Server failed on {op.describe()} ({e.status_code}): {e}")
                        return False
                    logger.warning(f"Dropping {op.describe()}, server answered {e.status_code}: {e}")
                except ValueError as e:
                    logger.warning(f"Dropping unusable operation {op.describe()}: {e}")
                self._pop(op)
                sent += 1
            if sent:
                logger.info(f"Outbox replay sent {sent} operation(s)")
            return True
        finally:
            self._replay_lock.release()
