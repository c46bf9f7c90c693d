"""Live-server helpers for the smoke and e2e suites."""

from __future__ import annotations

import os
import time
from collections.abc import Generator

import pytest
import requests


def is_server_ready(url: str, timeout: int = 2) -> bool:
    """Return True when the frontend readiness probe responds with 200."""
    try:
        response = requests.get(f"{url}/health/readiness", timeout=timeout)
    except requests.RequestException:
        return False
    return response.status_code == 200


def wait_for_server_ready(url: str, timeout: int = 30, interval: int = 1) -> None:
    """Poll the readiness probe until ready or timeout."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_server_ready(url):
            return
        time.sleep(interval)
    raise RuntimeError(f"Task frontend at {url} not ready after {timeout}s")


def live_server_url(*, base_url_env: str = "TEST_BASE_URL", suite_name: str = "smoke") -> Generator[str, None, None]:
    """
    Yield the base URL of a running task frontend.

    The URL comes from *base_url_env* (set by ``scripts/run_e2e.py``). When
    it is unset the suite is skipped rather than started implicitly.
    """
    base_url = os.getenv(base_url_env)
    if not base_url:
        pytest.skip(f"set {base_url_env} (or use scripts/run_e2e.py) to run {suite_name} tests")
    wait_for_server_ready(base_url.rstrip("/"))
    yield base_url.rstrip("/")
