"""
Configuration for the task tracker server and client.

Server settings live on a Flask config object and can be overridden with
TASK_TRACKER_* environment variables (e.g. TASK_TRACKER_PORT=5050).
Client settings are read from the environment by client_settings().
"""

import os
from dataclasses import dataclass
from os.path import expanduser

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_STORAGE_PATH = expanduser("~/.task_tracker/storage.sqlite3")
DEFAULT_TIMEOUT = 10.0


class Config:
    HOST = "127.0.0.1"
    PORT = int(os.environ.get("PORT", 5000))
    DEBUG = False
    TESTING = False
    LOG_LEVEL = "INFO"


@dataclass
class ClientSettings:
    api_url: str = DEFAULT_API_URL
    storage_path: str = DEFAULT_STORAGE_PATH
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"


def client_settings(environ=None) -> ClientSettings:
    env = os.environ if environ is None else environ
    try:
        timeout = float(env.get("TASK_TRACKER_TIMEOUT", DEFAULT_TIMEOUT))
    except ValueError:
        timeout = DEFAULT_TIMEOUT
    return ClientSettings(
        api_url=env.get("TASK_TRACKER_API_URL", DEFAULT_API_URL).rstrip("/"),
        storage_path=expanduser(env.get("TASK_TRACKER_STORAGE", DEFAULT_STORAGE_PATH)),
        timeout=timeout,
        log_level=env.get("TASK_TRACKER_LOG_LEVEL", "INFO").upper(),
    )
