import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from enum import Enum


class Category(str, Enum):
    PERSONAL = "Personal"
    PROFESSIONAL = "Professional"


CATEGORIES = [c.value for c in Category]


def utc_now_iso() -> str:
    """Current UTC time as e.g. 2024-05-01T12:00:00.000Z (sorts as text)."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def advance_timestamp(now: str, previous: str) -> str:
    """
    Timestamp for a change made after `previous`: `now`, or one millisecond
    past `previous` when the clock has not moved beyond it.
    """
    if not previous or now > previous:
        return now
    try:
        prev = datetime.fromisoformat(previous.replace("Z", "+00:00"))
    except ValueError:
        return now
    later = prev + timedelta(milliseconds=1)
    return later.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_task_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Task:
    id: str
    description: str
    category: Category
    completed: bool = False
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def create(cls, description: str, category, task_id: str = None, now: str = None):
        now = now or utc_now_iso()
        return cls(
            id=task_id or new_task_id(),
            description=description,
            category=Category(category),
            completed=False,
            created_at=now,
            updated_at=now,
        )

    def with_changes(self, now: str = None, **changes):
        changes["updated_at"] = now or utc_now_iso()
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "category": self.category.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Build a Task from its JSON shape. Raises ValueError on bad data."""
        if not isinstance(data, dict):
            raise ValueError(f"Task must be an object, got {type(data).__name__}")
        try:
            task_id = data["id"]
            description = data["description"]
            category = Category(data["category"])
        except KeyError as e:
            raise ValueError(f"Task is missing field {e}") from e
        completed = data.get("completed", False)
        if not isinstance(task_id, str) or not isinstance(description, str):
            raise ValueError("Task id and description must be strings")
        if not isinstance(completed, bool):
            raise ValueError("Task completed flag must be a boolean")
        return cls(
            id=task_id,
            description=description,
            category=category,
            completed=completed,
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", "")),
        )
