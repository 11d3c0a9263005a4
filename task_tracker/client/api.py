# task_tracker/client/api.py

import logging
from typing import List

import requests

from ..config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from ..errors import ApiError, TransportError
from ..models import Task

logger = logging.getLogger(__name__)


class TaskApiClient:
    """
    Thin wrapper over the REST task service.

    Every call is a single request: no retry, no backoff. Connection
    problems raise TransportError, non-2xx answers raise ApiError.
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, session=None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    @property
    def tasks_url(self) -> str:
        return f"{self.base_url}/tasks"

    def _request(self, method: str, url: str, payload: dict = None):
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ApiError(response.status_code, self._error_message(response))
        return response

    @staticmethod
    def _error_message(response):
        try:
            body = response.json()
        except ValueError:
            return response.text or None
        if isinstance(body, dict):
            return body.get("error") or body.get("message")
        return None

    @staticmethod
    def _data(response):
        try:
            return response.json()["data"]
        except (ValueError, KeyError, TypeError) as e:
            raise ApiError(response.status_code, f"Malformed response body: {e}") from e

    @staticmethod
    def _tasks(response, items):
        try:
            return [Task.from_dict(item) for item in items]
        except (ValueError, TypeError) as e:
            raise ApiError(response.status_code, f"Malformed task in response: {e}") from e

    def list_tasks(self) -> List[Task]:
        response = self._request("GET", self.tasks_url)
        return self._tasks(response, self._data(response))

    def create_task(self, description: str, category, task_id: str = None) -> Task:
        payload = {"description": description, "category": getattr(category, "value", category)}
        if task_id is not None:
            payload["id"] = task_id
        response = self._request("POST", self.tasks_url, payload)
        return self._tasks(response, [self._data(response)])[0]

    def update_task(self, task_id: str, description: str = None, completed: bool = None) -> Task:
        payload = {}
        if description is not None:
            payload["description"] = description
        if completed is not None:
            payload["completed"] = completed
        response = self._request("PUT", f"{self.tasks_url}/{task_id}", payload)
        return self._tasks(response, [self._data(response)])[0]

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"{self.tasks_url}/{task_id}")

    def health(self) -> dict:
        # /health lives at the server root, next to /api
        root = self.base_url[: -len("/api")] if self.base_url.endswith("/api") else self.base_url
        return self._request("GET", f"{root}/health").json()
