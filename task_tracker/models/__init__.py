from .task import CATEGORIES, Category, Task, advance_timestamp, utc_now_iso

__all__ = ["CATEGORIES", "Category", "Task", "advance_timestamp", "utc_now_iso"]
