"""
Error types shared by the server and the client.
"""


class TaskTrackerError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {"success": False, "error": self.message}


class ValidationError(TaskTrackerError):
    status_code = 400
    message = "Invalid request"


class NotFoundError(TaskTrackerError):
    status_code = 404
    message = "Task not found"


class ConflictError(TaskTrackerError):
    status_code = 409
    message = "Task already exists"


class TransportError(TaskTrackerError):
    """The remote task service could not be reached."""

    message = "Task service unreachable"


class ApiError(TaskTrackerError):
    """The remote task service answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str = None):
        super().__init__(message or f"Request failed with status {status_code}")
        self.status_code = status_code
