from .storage import TaskStore

__all__ = ["TaskStore"]
