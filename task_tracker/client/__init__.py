from .api import TaskApiClient
from .local_storage import LocalStorage, TaskMirror
from .outbox import Outbox, PendingOperation
from .sync import TaskSync

__all__ = ["LocalStorage", "Outbox", "PendingOperation", "TaskApiClient", "TaskMirror", "TaskSync"]
