"""
Task tracker: an in-memory REST task service and its offline-first client.
"""

import logging
import time

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import Config
from .errors import TaskTrackerError
from .models import utc_now_iso
from .services import TaskStore

logger = logging.getLogger(__name__)

__version__ = "1.0.0"


def create_app(config=None, store=None):
    """
    Application factory.

    `config` is a mapping of overrides applied last; `store` lets the caller
    own the TaskStore (tests inject one with a fixed clock).
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.from_prefixed_env("TASK_TRACKER")
    if config:
        app.config.from_mapping(config)

    app.json.sort_keys = False
    # /api/tasks and /api/tasks/ both reach the collection routes
    app.url_map.strict_slashes = False

    CORS(app)
    app.extensions["task_store"] = store if store is not None else TaskStore()

    from .routes import tasks_bp

    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    register_request_logging(app)
    register_error_handlers(app)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "OK", "timeStamp": utc_now_iso()})

    return app


def register_request_logging(app):
    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = g.pop("request_started", None)
        elapsed = (time.perf_counter() - started) * 1000 if started else 0.0
        logger.info(f"{request.method} {request.path} {response.status_code} {elapsed:.1f} ms")
        return response


def register_error_handlers(app):
    @app.errorhandler(TaskTrackerError)
    def handle_task_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    @app.errorhandler(405)
    def handle_not_found(e):
        return jsonify({"success": False, "error": "Route not Found"}), 404

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "error": e.description}), e.code
        logger.error(f"Unhandled error on {request.method} {request.path}: {e}", exc_info=True)
        return jsonify({"success": False, "error": "Internal Server Error"}), 500
