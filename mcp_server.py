"""
MCP Server wrapping the task tracker REST API (`mcp_server.py`)
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from task_tracker.client import TaskApiClient
from task_tracker.config import client_settings

logging.basicConfig(stream=sys.stderr, level=logging.INFO)
logger = logging.getLogger(__name__)

settings = client_settings()
api = TaskApiClient(settings.api_url, timeout=settings.timeout)

# Initialize MCP server
mcp = FastMCP("Task Tracker MCP Server")


@mcp.resource("tasks://list")
def list_tasks() -> list:
    """Fetch all tasks from the task service."""
    return [task.to_dict() for task in api.list_tasks()]


@mcp.tool()
def add_task(description: str, category: str = "Personal") -> dict:
    """Add a task. Category is 'Personal' or 'Professional'."""
    return api.create_task(description, category).to_dict()


@mcp.tool()
def complete_task(task_id: str, completed: bool = True) -> dict:
    """Mark a task completed (or not completed with completed=False)."""
    return api.update_task(task_id, completed=completed).to_dict()


@mcp.tool()
def delete_task(task_id: str) -> dict:
    """Delete a task by id."""
    api.delete_task(task_id)
    return {"result": "Task deleted", "id": task_id}


if __name__ == "__main__":
    logger.info(f"Starting MCP server against {settings.api_url}")
    # Run MCP server with stdio transport
    mcp.run(transport="stdio")
