import logging

from flask import Blueprint, current_app, jsonify, request

from ..errors import TaskTrackerError
from ..validators import validate_create_task, validate_task_id, validate_update_task

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)


def get_store():
    return current_app.extensions["task_store"]


def _failure(message):
    return jsonify({"success": False, "error": message}), 500


# GET /api/tasks -> all tasks
@tasks_bp.route("", methods=["GET"])
def get_all_tasks():
    try:
        tasks = get_store().all_tasks()
    except Exception as e:
        logger.error(f"Error retrieving tasks: {e}", exc_info=True)
        return _failure("Failed to retrieve tasks")
    return jsonify({"success": True, "data": [t.to_dict() for t in tasks]})


# POST /api/tasks -> create a task (client may supply its own id)
@tasks_bp.route("", methods=["POST"])
def create_task():
    dto = validate_create_task(request.get_json(silent=True))
    try:
        task = get_store().add_task(dto["description"], dto["category"], task_id=dto["task_id"])
    except TaskTrackerError:
        raise
    except Exception as e:
        logger.error(f"Error creating task: {e}", exc_info=True)
        return _failure("Failed to create task")
    logger.info(f"Created task {task.id} ({task.category.value})")
    return jsonify({"success": True, "data": task.to_dict()}), 201


# PUT /api/tasks/<id> -> update description and/or completed
@tasks_bp.route("/<task_id>", methods=["PUT"])
def update_task(task_id):
    validate_task_id(task_id)
    updates = validate_update_task(request.get_json(silent=True))
    try:
        task = get_store().update_task(task_id, **updates)
    except TaskTrackerError:
        raise
    except Exception as e:
        logger.error(f"Error updating task {task_id}: {e}", exc_info=True)
        return _failure("Failed to update task")
    return jsonify({"success": True, "data": task.to_dict()})


# DELETE /api/tasks/<id>
@tasks_bp.route("/<task_id>", methods=["DELETE"])
def delete_task(task_id):
    validate_task_id(task_id)
    try:
        get_store().delete_task(task_id)
    except TaskTrackerError:
        raise
    except Exception as e:
        logger.error(f"Error deleting task {task_id}: {e}", exc_info=True)
        return _failure("Failed to delete task")
    logger.info(f"Deleted task {task_id}")
    return "", 204
