"""
HTTP client for the upstream Task API.

Every public function issues exactly one request through
``requests.request`` against the configured ``TASK_API_BASE_URL``. There
is no retry and no circuit breaking: a network error, a non-2xx status or a
body that cannot be decoded is raised as a single :class:`TaskApiError` for
the calling view to turn into an inline message or a redirect.

Successful responses arrive wrapped as
``{"success", "message", "data", "timestamp"}``; the helpers here unwrap
``data`` and build the model objects the views work with.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from flask import current_app

from .forms import ListQuery
from .models import PaginatedTaskList, Task

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/v1/tasks"


class TaskApiError(Exception):
    """
    A failed call to the Task API.

    Attributes:
        status_code: HTTP status of the upstream reply, or ``None`` when no
            reply was received.
        message: The ``message`` field of the upstream error body, or
            ``None`` when the body did not carry one.
    """

    def __init__(self, description: str, *, status_code: int | None = None, message: str | None = None):
        super().__init__(description)
        self.status_code = status_code
        self.message = message

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


def _task_api_url(path: str) -> str:
    """Join the configured base URL and *path* without doubling slashes."""
    return f"{current_app.config['TASK_API_BASE_URL'].rstrip('/')}/{path.lstrip('/')}"


def _task_path(task_id: str, suffix: str = "") -> str:
    """Build the path for one task, keeping *task_id* inside a single segment."""
    segment = quote(str(task_id), safe="")
    # quote() leaves dots alone, and "." or ".." would be resolved as a dot segment.
    if set(segment) <= {"."}:
        segment = segment.replace(".", "%2E")
    return f"{TASKS_PATH}/{segment}{suffix}"


def _error_body_message(response: requests.Response) -> str | None:
    """Return the upstream error body's ``message`` field, if it has one."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None


def call_task_api(method: str, path: str, **kwargs) -> Any:
    """
    Call the Task API once and return its decoded JSON body.

    Args:
        method: HTTP method (``"GET"``, ``"POST"``, ``"PUT"``, ...).
        path: Path relative to the base URL (e.g. ``"/api/v1/tasks"``).
        **kwargs: Forwarded to :func:`requests.request` (``json``,
            ``params``).

    Returns:
        The decoded JSON body, or ``None`` when the reply has no body.

    Raises:
        TaskApiError: On network failure, a non-2xx status, or a body that
            is not valid JSON.
    """
    url = _task_api_url(path)
    try:
        response = requests.request(
            method=method,
            url=url,
            timeout=current_app.config.get("TASK_API_TIMEOUT"),
            **kwargs,
        )
    except requests.RequestException as exc:
        logger.warning("Task API %s %s failed: %s", method, url, exc)
        raise TaskApiError(f"Task API unreachable: {exc}") from exc

    if not 200 <= response.status_code < 300:
        message = _error_body_message(response)
        logger.warning("Task API %s %s returned %s", method, url, response.status_code)
        raise TaskApiError(
            f"Task API returned {response.status_code}",
            status_code=response.status_code,
            message=message,
        )

    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("Task API %s %s returned a malformed body", method, url)
        raise TaskApiError("Malformed Task API response", status_code=response.status_code) from exc


def _unwrap_data(payload: Any) -> dict[str, Any]:
    """Extract the ``data`` object from a wrapped API response."""
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
        raise TaskApiError("Malformed Task API response: missing data")
    return payload["data"]


def _build(factory, data: dict[str, Any]):
    try:
        return factory(data)
    except (KeyError, TypeError) as exc:
        raise TaskApiError(f"Malformed Task API response: {exc}") from exc


def list_tasks(query: ListQuery) -> PaginatedTaskList:
    """Fetch one page of tasks matching *query*."""
    payload = call_task_api("GET", TASKS_PATH, params=query.to_params())
    return _build(PaginatedTaskList.from_api, _unwrap_data(payload))


def get_task(task_id: str) -> Task:
    """Fetch a single task by id."""
    payload = call_task_api("GET", _task_path(task_id))
    return _build(Task.from_api, _unwrap_data(payload))


def create_task(body: dict[str, Any]) -> Any:
    return call_task_api("POST", TASKS_PATH, json=body)


def update_task(task_id: str, body: dict[str, Any]) -> Any:
    return call_task_api("PUT", _task_path(task_id), json=body)


def update_task_status(task_id: str, status: str | None) -> Any:
    """Send a status change; a missing status is left out of the body."""
    body = {} if status is None else {"status": status}
    return call_task_api("PATCH", _task_path(task_id, "/status"), json=body)


def delete_task(task_id: str) -> None:
    call_task_api("DELETE", _task_path(task_id))
