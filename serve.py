"""
Standalone server bootstrap for the task frontend.

Binds the application to ``PORT`` (default 3100) with Werkzeug's threaded
server. In development mode, and only when both the certificate and key
files exist, the server speaks HTTPS.

SIGINT/SIGTERM start a graceful shutdown: the readiness probe flips to
DOWN straight away, and once ``SHUTDOWN_GRACE_SECONDS`` have passed the
listening socket is closed.
"""

from __future__ import annotations

import logging
import os
import signal
import threading
from pathlib import Path

from flask import Flask
from werkzeug.serving import make_server

from task_frontend import create_app
from task_frontend.readiness import ReadinessState

logger = logging.getLogger("task_frontend.serve")


def ssl_context_for(app: Flask) -> tuple[str, str] | None:
    """
    Return the ``(cert, key)`` pair to serve TLS with, if TLS applies.

    Only the development configuration may enable TLS, and only when both
    files are present on disk.
    """
    if not app.config.get("SSL_ENABLED_MODE"):
        return None
    cert_path = Path(app.config["SSL_CERT_PATH"])
    key_path = Path(app.config["SSL_KEY_PATH"])
    if cert_path.is_file() and key_path.is_file():
        return str(cert_path), str(key_path)
    return None


def install_shutdown_handlers(server, readiness: ReadinessState, grace_seconds: float) -> None:
    """Register SIGINT/SIGTERM handlers that drain, then stop, *server*."""

    def _graceful_shutdown(signum, _frame):
        signal_name = signal.Signals(signum).name
        logger.warning("Caught %s, gracefully shutting down. Setting readiness to DOWN", signal_name)
        readiness.mark_shutting_down()

        def _close():
            logger.info("Shutting down application")
            server.shutdown()

        timer = threading.Timer(grace_seconds, _close)
        timer.daemon = True
        timer.start()

    signal.signal(signal.SIGINT, _graceful_shutdown)
    signal.signal(signal.SIGTERM, _graceful_shutdown)


def main(config_name: str | None = None) -> None:
    """Build the app, bind the port and serve until shut down."""
    readiness = ReadinessState()
    app = create_app(config_name or os.getenv("FLASK_ENV", "development"), readiness=readiness)
    port = int(app.config["PORT"])
    ssl_context = ssl_context_for(app)

    server = make_server("0.0.0.0", port, app, threaded=True, ssl_context=ssl_context)
    install_shutdown_handlers(server, readiness, float(app.config["SHUTDOWN_GRACE_SECONDS"]))

    scheme = "https" if ssl_context else "http"
    logger.info("Application started: %s://localhost:%s", scheme, port)
    try:
        server.serve_forever()
    finally:
        server.server_close()
    logger.info("Server closed")


if __name__ == "__main__":
    main()
