"""
Request payload checks for the task routes.

Each validator returns the cleaned values and raises ValidationError with a
message naming the offending field.
"""

import re

from .errors import ValidationError
from .models import CATEGORIES

# Simple UUID v4 pattern
UUID_V4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def _require_object(data):
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def validate_task_id(task_id) -> str:
    if not isinstance(task_id, str) or not UUID_V4_PATTERN.match(task_id):
        raise ValidationError("Invalid task ID format")
    return task_id


def validate_create_task(data) -> dict:
    data = _require_object(data)
    description = data.get("description")
    category = data.get("category")

    if not description or not isinstance(description, str):
        raise ValidationError("Description is required and must be a string")
    if not description.strip():
        raise ValidationError("Description cannot be empty or whitespace only")

    if not category or not isinstance(category, str):
        raise ValidationError("Category is required and must be a string")
    if category not in CATEGORIES:
        raise ValidationError(f"Category must be one of: {', '.join(CATEGORIES)}")

    task_id = data.get("id")
    if task_id is not None:
        validate_task_id(task_id)

    return {"description": description, "category": category, "task_id": task_id}


def validate_update_task(data) -> dict:
    data = _require_object(data)
    description = data.get("description")
    completed = data.get("completed")

    if description is None and completed is None:
        raise ValidationError("At least one field (description or completed) must be provided")

    if description is not None:
        if not isinstance(description, str):
            raise ValidationError("Description must be a string")
        if not description.strip():
            raise ValidationError("Description cannot be empty or whitespace only")

    if completed is not None and not isinstance(completed, bool):
        raise ValidationError("Completed must be a boolean value")

    return {"description": description, "completed": completed}
