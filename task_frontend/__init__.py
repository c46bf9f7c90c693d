"""
Task frontend Flask application factory.

Provides the ``create_app`` factory for the server-rendered task UI. The
application is a stateless front-end: it renders Jinja templates and
forwards every read and write to the upstream Task API, never touching a
database itself.
"""

from __future__ import annotations

import logging

from flask import Flask, render_template

from config import get_config

from .formatting import TEMPLATE_FILTERS
from .readiness import ReadinessState

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    """Render HTML error pages instead of Werkzeug's defaults or a traceback."""

    @app.errorhandler(404)
    def page_not_found(_error):
        return render_template("error.html", title="Page not found", status_code=404), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.exception("Internal server error: %s", getattr(error, "original_exception", error))
        return (
            render_template("error.html", title="Sorry, there is a problem with the service", status_code=500),
            500,
        )


def create_app(config_name: str | None = None, readiness: ReadinessState | None = None) -> Flask:
    """
    Create and configure the task frontend application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``). When
            *None*, the value is read from ``FLASK_ENV``, defaulting to
            ``"development"``.
        readiness: Readiness state owned by the process bootstrap. A fresh,
            ready state is created when omitted (tests, WSGI servers).

    Returns:
        A configured :class:`~flask.Flask` application.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.extensions["readiness"] = readiness or ReadinessState()
    app.jinja_env.filters.update(TEMPLATE_FILTERS)

    logger.info("Creating task frontend app with config: %s", config_class.__name__)

    # Import inside the factory to avoid circular imports -- the blueprint
    # modules reference helpers from this package, which must exist first.
    from .routes.health import health_bp
    from .routes.views import views_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(views_bp)
    _register_error_handlers(app)
    return app
