# tests/fakes.py

from concurrent.futures import Future
from urllib.parse import urlsplit

from task_tracker.errors import ApiError, NotFoundError, TransportError
from task_tracker.models import Task


class ImmediateExecutor:
    """Runs submitted work on the calling thread so tests stay deterministic."""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True):
        pass


class FakeTaskApi:
    """
    In-memory stand-in for TaskApiClient.

    Set `online = False` to make every call raise TransportError.
    """

    def __init__(self, tasks=None):
        self.tasks = {t.id: t for t in (tasks or [])}
        self.online = True
        self.calls = []

    def _check(self, name, *args):
        self.calls.append((name,) + args)
        if not self.online:
            raise TransportError("connection refused")

    def list_tasks(self):
        self._check("list_tasks")
        return list(self.tasks.values())

    def create_task(self, description, category, task_id=None):
        self._check("create_task", task_id)
        if task_id in self.tasks:
            raise ApiError(409, "Task already exists")
        task = Task.create(description, category, task_id=task_id)
        self.tasks[task.id] = task
        return task

    def update_task(self, task_id, description=None, completed=None):
        self._check("update_task", task_id)
        if task_id not in self.tasks:
            raise ApiError(404, NotFoundError.message)
        changes = {}
        if description is not None:
            changes["description"] = description
        if completed is not None:
            changes["completed"] = completed
        self.tasks[task_id] = self.tasks[task_id].with_changes(**changes)
        return self.tasks[task_id]

    def delete_task(self, task_id):
        self._check("delete_task", task_id)
        if task_id not in self.tasks:
            raise ApiError(404, NotFoundError.message)
        del self.tasks[task_id]


class FlaskSession:
    """
    requests.Session look-alike that sends requests to a Flask test client,
    so TaskApiClient can talk to a real app without a network.
    """

    def __init__(self, app):
        self.client = app.test_client()

    def request(self, method, url, json=None, timeout=None):
        path = urlsplit(url).path
        return _Response(self.client.open(path, method=method, json=json))


class _Response:
    def __init__(self, response):
        self.status_code = response.status_code
        self.text = response.get_data(as_text=True)
        self._response = response

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("No JSON body")
        return data


class FixedClock:
    """Timestamp source that moves forward one second per call."""

    def __init__(self, start=0):
        self.ticks = start

    def __call__(self):
        self.ticks += 1
        minutes, seconds = divmod(self.ticks, 60)
        return f"2024-01-01T00:{minutes:02d}:{seconds:02d}.000Z"
