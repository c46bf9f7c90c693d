"""
Configuration classes for the task frontend.

The frontend is a stateless server-rendered UI. It keeps no data of its own
and delegates every read and write to the upstream Task API over HTTP, so
the settings here are mostly about where that API lives and how the local
server is bootstrapped.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
SSL_DIR = BASE_DIR / "resources" / "localhost-ssl"


def _optional_float(env_var: str) -> float | None:
    """Read a float from the environment, returning None when unset or blank."""
    raw_value = os.environ.get(env_var, "").strip()
    if not raw_value:
        return None
    return float(raw_value)


class Config:
    """Base configuration for all frontend environments."""

    # Upstream Task API. Timeout of None leaves requests' default behaviour.
    TASK_API_BASE_URL: str = os.environ.get("TASK_API_BASE_URL", "http://localhost:4000")
    TASK_API_TIMEOUT: float | None = _optional_float("TASK_API_TIMEOUT")

    DEFAULT_PAGE_SIZE: int = 10

    PORT: int = int(os.environ.get("PORT", "3100"))
    SSL_ENABLED_MODE: bool = False
    SSL_CERT_PATH: str = os.environ.get("SSL_CERT_PATH", str(SSL_DIR / "localhost.crt"))
    SSL_KEY_PATH: str = os.environ.get("SSL_KEY_PATH", str(SSL_DIR / "localhost.key"))
    SHUTDOWN_GRACE_SECONDS: float = float(os.environ.get("SHUTDOWN_GRACE_SECONDS", "4"))


class DevelopmentConfig(Config):
    """Configuration for local development (the only mode that may serve TLS)."""

    DEBUG: bool = True
    TESTING: bool = False
    SSL_ENABLED_MODE: bool = True

    # DEBUG would otherwise re-raise unhandled errors past the 500 page.
    PROPAGATE_EXCEPTIONS: bool = False


class TestingConfig(Config):
    """Configuration for automated tests."""

    DEBUG: bool = True
    TESTING: bool = True

    # Non-routable host so a missed monkeypatch never reaches a real API.
    TASK_API_BASE_URL: str = os.environ.get("TEST_TASK_API_BASE_URL", "http://task-api.test")
    TASK_API_TIMEOUT: float | None = float(os.environ.get("TEST_TASK_API_TIMEOUT", "1"))
    SHUTDOWN_GRACE_SECONDS: float = 0.0


class ProductionConfig(Config):
    """Configuration for production deployments."""

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up and return the configuration class for the given environment.

    Args:
        env: Environment name. When None, falls back to FLASK_ENV.

    Returns:
        The selected configuration class.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
