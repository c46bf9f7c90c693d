"""
Request normalisation for the task views.

Turns raw query-string and form values into typed, defaulted values. The
list query is permissive: bad paging input silently falls back to the
defaults. Form submissions are only checked for the two required fields;
everything else is left for the upstream API to validate.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .models import TaskPriority, TaskStatus

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 10

TITLE_REQUIRED = "Title is required"
DUE_DATE_REQUIRED = "Due date and time is required"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_page_param(raw: str | None, default: int) -> int:
    """
    Parse a paging parameter, falling back to *default*.

    Leading digits are accepted (``"12abc"`` gives 12). Input with no
    leading digits, or that parses to 0, yields *default*.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    return int(match.group(1)) or default


def _optional(value: str | None) -> str | None:
    return value if value else None


@dataclass(frozen=True)
class ListQuery:
    """Paging and filter parameters for the task list page."""

    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    status: str | None = None
    priority: str | None = None
    search: str | None = None

    @classmethod
    def from_args(cls, args: Mapping[str, str], default_size: int = DEFAULT_PAGE_SIZE) -> ListQuery:
        return cls(
            page=parse_page_param(args.get("page"), DEFAULT_PAGE),
            size=parse_page_param(args.get("size"), default_size),
            status=_optional(args.get("status")),
            priority=_optional(args.get("priority")),
            search=_optional(args.get("search")),
        )

    def to_params(self) -> dict[str, Any]:
        """Return the upstream query parameters; filters only when set."""
        params: dict[str, Any] = {"page": self.page, "size": self.size}
        if self.status:
            params["status"] = self.status
        if self.priority:
            params["priority"] = self.priority
        if self.search:
            params["search"] = self.search
        return params

    def filters(self) -> dict[str, str]:
        """Return the filters echoed back into the list page's filter form."""
        return {
            "status": self.status or "",
            "priority": self.priority or "",
            "search": self.search or "",
        }


@dataclass(frozen=True)
class TaskFormSubmission:
    """
    The create/edit form as submitted by the browser.

    Values are kept raw so that they can be echoed back into the form
    unchanged when the submission has to be re-rendered.
    """

    title: str | None = None
    description: str | None = None
    due_date_time: str | None = None
    priority: str | None = None
    status: str | None = None

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> TaskFormSubmission:
        return cls(
            title=form.get("title"),
            description=form.get("description"),
            due_date_time=form.get("dueDateTime"),
            priority=form.get("priority"),
            status=form.get("status"),
        )

    def validate(self) -> str | None:
        """
        Check the required fields.

        Returns:
            The message for the first failing field, or ``None`` when the
            submission can be sent upstream.
        """
        if not (self.title or "").strip():
            return TITLE_REQUIRED
        if not self.due_date_time:
            return DUE_DATE_REQUIRED
        return None

    def create_payload(self) -> dict[str, Any]:
        """Build the JSON body for ``POST /api/v1/tasks``."""
        return {
            "title": (self.title or "").strip(),
            "description": (self.description or "").strip() or None,
            "dueDateTime": self.due_date_time,
            "priority": self.priority or TaskPriority.MEDIUM.value,
        }

    def update_payload(self) -> dict[str, Any]:
        """Build the JSON body for ``PUT /api/v1/tasks/{id}``."""
        payload = self.create_payload()
        payload["status"] = self.status or TaskStatus.PENDING.value
        return payload

    def echo(self, task_id: str | None = None) -> dict[str, Any]:
        """Return the submitted values for re-rendering the form."""
        return {
            "id": task_id,
            "title": self.title or "",
            "description": self.description or "",
            "due_date_time": self.due_date_time or "",
            "priority": self.priority or "",
            "status": self.status or "",
        }
