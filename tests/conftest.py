"""
Shared pytest fixtures for the task frontend test suite.

The frontend is stateless and owns no database, so the fixture set is
small: a Flask app and test client, plus a fake Task API that replaces
``requests.request`` for the duration of a test. The fake records every
call and answers with canned responses, which lets route tests assert
both what the browser sees and what was sent upstream.

Key SDET Concepts Demonstrated:
- Fixture scoping (session vs. function) for performance and isolation
- Monkeypatching the HTTP client instead of running the real upstream
- Fake response objects as lightweight test doubles
"""

from __future__ import annotations

import json
import os
from typing import Any

import pytest
import requests

os.environ["FLASK_ENV"] = "testing"

from task_frontend import create_app


class _FakeResponse:
    """
    Minimal stand-in for :class:`requests.Response`.

    Provides the attributes the Task API client reads: ``status_code``,
    ``content`` and ``json()``. A response without a payload has an empty
    body, and ``json()`` raises ``ValueError`` like requests does.
    """

    def __init__(self, status_code: int, payload: Any = None):
        self.status_code = status_code
        self._payload = payload
        self.content = b"" if payload is None else json.dumps(payload).encode("utf-8")

    def json(self):
        """Return the pre-configured JSON payload."""
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeTaskApi:
    """
    In-memory replacement for the upstream Task API.

    Replies are registered per ``(method, path)``. A call to anything not
    registered fails the test with an ``AssertionError`` so that stray
    upstream calls never go unnoticed.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self.calls: list[dict[str, Any]] = []
        self._replies: dict[tuple[str, str], _FakeResponse | Exception] = {}

    def reply(self, method: str, path: str, status_code: int = 200, payload: Any = None) -> None:
        self._replies[(method, path)] = _FakeResponse(status_code, payload)

    def fail(self, method: str, path: str, error: Exception | None = None) -> None:
        self._replies[(method, path)] = error or requests.ConnectionError("unreachable")

    def calls_for(self, method: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["method"] == method]

    def __call__(self, **kwargs):
        self.calls.append(kwargs)
        url = kwargs["url"]
        assert url.startswith(self.base_url), f"Unexpected upstream host: {url}"
        key = (kwargs["method"], url[len(self.base_url):])
        if key not in self._replies:
            raise AssertionError(f"Unexpected Task API call: {key[0]} {key[1]}")
        reply = self._replies[key]
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture(scope="session")
def app():
    """
    Provide the Flask application instance for the entire test session.

    Creates the app once with the 'testing' config and reuses it
    across all tests to avoid repeated startup overhead.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client scoped to a single test function."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def task_api(app, monkeypatch):
    """
    Replace the Task API with a :class:`FakeTaskApi` for one test.

    Returns:
        The fake, for registering replies and inspecting recorded calls.
    """
    fake_api = FakeTaskApi(app.config["TASK_API_BASE_URL"])
    monkeypatch.setattr("task_frontend.api_client.requests.request", fake_api)
    return fake_api
