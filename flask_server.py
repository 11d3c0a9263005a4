"""
REST task service: in-memory tasks under /api/tasks.
"""

import logging

from task_tracker import create_app

app = create_app()

logging.basicConfig(
    level=app.config.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    host, port = app.config["HOST"], int(app.config["PORT"])
    logger.info(f"Server running on http://{host}:{port}")
    app.run(host=host, port=port, debug=app.config["DEBUG"], use_reloader=False)


if __name__ == '__main__':
    main()
