"""
Task frontend data models.

Mirrors the upstream Task API's data contract. Nothing here is persisted:
every instance is built from an upstream response for a single request and
thrown away once the page has been rendered.

The enums inherit from ``str`` as well as ``Enum`` so that they compare
directly against the plain strings returned by the API. Each member also
carries its display label and GOV.UK tag class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    """
    Task lifecycle statuses (mirrors the upstream contract).

    Attributes:
        PENDING: Task has been created but work has not started.
        IN_PROGRESS: Task is actively being worked on.
        COMPLETED: Task has been finished.
        CANCELLED: Task was abandoned.
    """

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def tag_class(self) -> str:
        return _STATUS_TAG_CLASSES[self]


class TaskPriority(str, Enum):
    """
    Task priority levels (mirrors the upstream contract).

    Attributes:
        LOW: Low urgency.
        MEDIUM: Normal urgency (default for new tasks).
        HIGH: High urgency.
        URGENT: Needs attention now.
    """

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def label(self) -> str:
        return _PRIORITY_LABELS[self]

    @property
    def tag_class(self) -> str:
        return _PRIORITY_TAG_CLASSES[self]


_STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.COMPLETED: "Completed",
    TaskStatus.CANCELLED: "Cancelled",
}

_STATUS_TAG_CLASSES = {
    TaskStatus.PENDING: "govuk-tag--grey",
    TaskStatus.IN_PROGRESS: "govuk-tag--blue",
    TaskStatus.COMPLETED: "govuk-tag--green",
    TaskStatus.CANCELLED: "govuk-tag--red",
}

_PRIORITY_LABELS = {
    TaskPriority.LOW: "Low",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.HIGH: "High",
    TaskPriority.URGENT: "Urgent",
}

_PRIORITY_TAG_CLASSES = {
    TaskPriority.LOW: "govuk-tag--grey",
    TaskPriority.MEDIUM: "govuk-tag--yellow",
    TaskPriority.HIGH: "govuk-tag--orange",
    TaskPriority.URGENT: "govuk-tag--red",
}


@dataclass(frozen=True)
class Task:
    """
    A single task as returned by the upstream API.

    ``status`` and ``priority`` are kept as raw strings: the API is the
    source of truth, so a value this frontend does not know about is
    displayed verbatim instead of being rejected.
    """

    id: int
    title: str
    status: str
    priority: str
    description: str | None = None
    due_date_time: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    overdue: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Task:
        """
        Build a task from the upstream camelCase JSON object.

        Raises:
            KeyError: If a required field is missing.
        """
        return cls(
            id=data["id"],
            title=data["title"],
            status=data["status"],
            priority=data["priority"],
            description=data.get("description"),
            due_date_time=data.get("dueDateTime"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            overdue=bool(data.get("overdue", False)),
        )


@dataclass(frozen=True)
class PaginatedTaskList:
    """One page of tasks, with paging metadata passed through from upstream."""

    items: list[Task] = field(default_factory=list)
    page: int = 0
    size: int = 10
    total_elements: int = 0
    total_pages: int = 0
    first: bool = True
    last: bool = True
    has_next: bool = False
    has_previous: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PaginatedTaskList:
        """
        Build a page from the upstream ``data`` object.

        Item order is kept exactly as returned; no client-side sorting.

        Raises:
            KeyError: If a required field is missing.
        """
        return cls(
            items=[Task.from_api(item) for item in data["items"]],
            page=data["page"],
            size=data["size"],
            total_elements=data["totalElements"],
            total_pages=data["totalPages"],
            first=data["first"],
            last=data["last"],
            has_next=data["hasNext"],
            has_previous=data["hasPrevious"],
        )

    @classmethod
    def empty(cls, size: int = 10) -> PaginatedTaskList:
        """Return the zero-valued page shown when the list cannot be loaded."""
        return cls(size=size)
