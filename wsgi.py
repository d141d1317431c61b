"""WSGI entry point for the task store service."""

import logging
import os

from werkzeug.serving import make_server

from task_store import create_app

logger = logging.getLogger(__name__)

app = create_app(os.getenv("FLASK_ENV", "production"))


def main() -> None:
    """Start the built-in server on the configured address (``:8080``)."""
    host = app.config["HOST"]
    port = app.config["PORT"]

    try:
        server = make_server(host, port, app, threaded=True)
    except OSError as exc:
        logger.error("Failed to start server: %s", exc)
        return
    except SystemExit:
        # werkzeug reports bind errors on stderr and exits instead of raising
        logger.error("Failed to start server: cannot listen on %s:%d", host, port)
        return

    logger.info("Listen and serve on %s:%d", host, port)
    try:
        server.serve_forever()
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
