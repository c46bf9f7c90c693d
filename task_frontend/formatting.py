"""
Display helpers that turn upstream task data into view-model fields.

Every function here is pure and total: it never raises and never performs
I/O. Known enum values map to fixed labels and tag classes; anything else
falls back to a verbatim label and an empty class, so an unexpected value
from the API still renders.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .models import PaginatedTaskList, Task, TaskPriority, TaskStatus

NOT_SET = "Not set"

LIST_OUTCOME_MESSAGES = {
    "success": {
        "created": "Task created successfully",
        "deleted": "Task deleted successfully",
    },
    "error": {
        "not-found": "Task not found",
        "delete-failed": "Failed to delete task",
    },
}

DETAIL_OUTCOME_MESSAGES = {
    "success": {
        "updated": "Task updated successfully",
        "status-updated": "Task status updated successfully",
    },
    "error": {
        "status-update-failed": "Failed to update task status",
    },
}


def status_label(value: str) -> str:
    try:
        return TaskStatus(value).label
    except ValueError:
        return value


def priority_label(value: str) -> str:
    try:
        return TaskPriority(value).label
    except ValueError:
        return value


def status_tag_class(value: str) -> str:
    try:
        return TaskStatus(value).tag_class
    except ValueError:
        return ""


def priority_tag_class(value: str) -> str:
    try:
        return TaskPriority(value).tag_class
    except ValueError:
        return ""


def _parse_iso_datetime(iso_string: str | None) -> datetime | None:
    """
    Parse an ISO-8601 string from the API or a datetime-local form field.

    Handles the ``Z`` suffix by replacing it with ``+00:00``. Naive values
    are taken to be UTC.

    Returns:
        An aware UTC :class:`datetime`, or ``None`` if the input was empty
        or could not be parsed.
    """
    if not iso_string:
        return None
    try:
        parsed = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(value: str | None) -> str:
    """
    Format a date-time for display, e.g. ``"25 December 2024 at 10:30"``.

    Missing values read "Not set"; unparseable ones are shown as received.
    """
    if not value:
        return NOT_SET
    parsed = _parse_iso_datetime(value)
    if parsed is None:
        return value
    return f"{parsed.day} {parsed:%B %Y} at {parsed:%H:%M}"


def format_date_for_input(value: str | None) -> str:
    """Format a date-time as ``YYYY-MM-DDTHH:MM`` for a datetime-local input."""
    parsed = _parse_iso_datetime(value)
    if parsed is None:
        return ""
    return parsed.strftime("%Y-%m-%dT%H:%M")


def task_view(task: Task) -> dict[str, Any]:
    """
    Build the display record for a task on the list, detail and delete pages.

    Returns:
        The task's own fields plus formatted dates, labels and tag classes.
    """
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "priority": task.priority,
        "due_date_time": task.due_date_time,
        "overdue": task.overdue,
        "formatted_due_date": format_date(task.due_date_time),
        "formatted_created_at": format_date(task.created_at),
        "formatted_updated_at": format_date(task.updated_at),
        "status_display": status_label(task.status),
        "priority_display": priority_label(task.priority),
        "status_tag_class": status_tag_class(task.status),
        "priority_tag_class": priority_tag_class(task.priority),
    }


def task_form_view(task: Task) -> dict[str, Any]:
    """Build the values that pre-populate the edit form for an existing task."""
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description or "",
        "due_date_time": format_date_for_input(task.due_date_time),
        "priority": task.priority,
        "status": task.status,
    }


def pagination_view(page: PaginatedTaskList) -> dict[str, Any]:
    return {
        "current_page": page.page,
        "total_pages": page.total_pages,
        "total_elements": page.total_elements,
        "size": page.size,
        "has_next": page.has_next,
        "has_previous": page.has_previous,
    }


def outcome_message(messages: dict[str, dict[str, str]], kind: str, flag: str | None) -> str | None:
    """
    Look up the banner text for a ``success=`` or ``error=`` query flag.

    Args:
        messages: One of the ``*_OUTCOME_MESSAGES`` tables.
        kind: ``"success"`` or ``"error"``.
        flag: The raw query-string value, if any.

    Returns:
        The banner text, or ``None`` for a missing or unknown flag.
    """
    if not flag:
        return None
    return messages.get(kind, {}).get(flag)


TEMPLATE_FILTERS = {
    "status_label": status_label,
    "priority_label": priority_label,
    "status_tag_class": status_tag_class,
    "priority_tag_class": priority_tag_class,
    "format_date": format_date,
    "format_date_for_input": format_date_for_input,
}
