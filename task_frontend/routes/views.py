"""
HTML view routes for the task frontend.

Each handler follows the same shape: normalise the query string or form
body, make a single call to the upstream Task API, map the reply into
display fields, then either render a template or redirect. Results of an
action are carried across redirects as ``success=`` / ``error=`` query
flags, which the list and detail pages turn into banners.

Upstream failures never reach the browser as a 5xx. The list page renders
an inline error; create and edit re-render their form with a message;
every other route redirects with an error flag.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, current_app, redirect, render_template, request, url_for

from .. import api_client
from ..api_client import TaskApiError
from ..formatting import (
    DETAIL_OUTCOME_MESSAGES,
    LIST_OUTCOME_MESSAGES,
    outcome_message,
    pagination_view,
    task_form_view,
    task_view,
)
from ..forms import ListQuery, TaskFormSubmission
from ..models import PaginatedTaskList, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)

LIST_LOAD_FAILED = "Failed to load tasks. Please try again later."
CREATE_FAILED = "Failed to create task. Please try again."
UPDATE_FAILED = "Failed to update task. Please try again."


# =====================================================================
# Helper Functions
# =====================================================================


def _render_form(task: dict[str, Any] | None, *, is_edit: bool, error: str | None):
    """
    Render the shared create/edit form.

    Args:
        task: Values to pre-populate the fields with, or ``None`` for a
            blank form.
        is_edit: Whether the form edits an existing task.
        error: Message shown above the form, if any.
    """
    return render_template(
        "tasks/form.html",
        task=task,
        is_edit=is_edit,
        error=error,
        statuses=TaskStatus,
        priorities=TaskPriority,
    )


def _upstream_message(error: TaskApiError, default: str) -> str:
    """Prefer the message supplied by the Task API over the generic one."""
    if error.message is not None:
        return error.message
    return default


def _page_links(query: ListQuery, page: PaginatedTaskList) -> dict[str, str | None]:
    """Build Previous/Next links that keep the current size and filters."""

    def _url(page_index: int) -> str:
        params = {**query.to_params(), "page": page_index}
        return url_for("views.list_tasks", **params)

    return {
        "previous": _url(page.page - 1) if page.has_previous else None,
        "next": _url(page.page + 1) if page.has_next else None,
    }


def _redirect_to_list(**flags: str):
    return redirect(url_for("views.list_tasks", **flags))


def _redirect_to_detail(task_id: str, **flags: str):
    return redirect(url_for("views.task_detail", task_id=task_id, **flags))


# =====================================================================
# Pages
# =====================================================================


@views_bp.route("/", methods=["GET"])
def home():
    """Render the service start page."""
    return render_template("home.html", statuses=TaskStatus, priorities=TaskPriority)


@views_bp.route("/tasks", methods=["GET"])
def list_tasks():
    """
    Render the paginated task list.

    Paging and filter parameters are forwarded to the Task API. When the
    API cannot be reached the page is still rendered with a 200, an empty
    list and an inline error.
    """
    query = ListQuery.from_args(request.args, default_size=current_app.config["DEFAULT_PAGE_SIZE"])

    try:
        page = api_client.list_tasks(query)
    except TaskApiError as error:
        logger.warning("Error fetching tasks: %s", error)
        empty_page = PaginatedTaskList.empty(size=current_app.config["DEFAULT_PAGE_SIZE"])
        return render_template(
            "tasks/list.html",
            tasks=[],
            pagination=pagination_view(empty_page),
            page_links={"previous": None, "next": None},
            filters=ListQuery().filters(),
            statuses=TaskStatus,
            priorities=TaskPriority,
            success=None,
            error=LIST_LOAD_FAILED,
        )

    return render_template(
        "tasks/list.html",
        tasks=[task_view(task) for task in page.items],
        pagination=pagination_view(page),
        page_links=_page_links(query, page),
        filters=query.filters(),
        statuses=TaskStatus,
        priorities=TaskPriority,
        success=outcome_message(LIST_OUTCOME_MESSAGES, "success", request.args.get("success")),
        error=outcome_message(LIST_OUTCOME_MESSAGES, "error", request.args.get("error")),
    )


@views_bp.route("/tasks/create", methods=["GET"])
def create_task_form():
    """Render the empty task creation form."""
    return _render_form(None, is_edit=False, error=request.args.get("error"))


@views_bp.route("/tasks/create", methods=["POST"])
def create_task():
    """
    Handle the task creation form.

    Missing fields re-render the form without calling the API. An API
    failure also re-renders the form, showing the API's own message when
    it supplied one.
    """
    submission = TaskFormSubmission.from_form(request.form)
    validation_error = submission.validate()
    if validation_error:
        return _render_form(submission.echo(), is_edit=False, error=validation_error)

    try:
        api_client.create_task(submission.create_payload())
    except TaskApiError as error:
        logger.warning("Error creating task: %s", error)
        return _render_form(
            submission.echo(),
            is_edit=False,
            error=_upstream_message(error, CREATE_FAILED),
        )

    return _redirect_to_list(success="created")


@views_bp.route("/tasks/<task_id>", methods=["GET"])
def task_detail(task_id: str):
    """Render a single task, or go back to the list when it cannot be loaded."""
    try:
        task = api_client.get_task(task_id)
    except TaskApiError as error:
        logger.warning("Error fetching task %s: %s", task_id, error)
        return _redirect_to_list(error="not-found")

    return render_template(
        "tasks/detail.html",
        task=task_view(task),
        statuses=TaskStatus,
        success=outcome_message(DETAIL_OUTCOME_MESSAGES, "success", request.args.get("success")),
        error=outcome_message(DETAIL_OUTCOME_MESSAGES, "error", request.args.get("error")),
    )


@views_bp.route("/tasks/<task_id>/edit", methods=["GET"])
def edit_task_form(task_id: str):
    """Render the edit form pre-populated with the task's current values."""
    try:
        task = api_client.get_task(task_id)
    except TaskApiError as error:
        logger.warning("Error fetching task %s for edit: %s", task_id, error)
        return _redirect_to_list(error="not-found")

    return _render_form(task_form_view(task), is_edit=True, error=request.args.get("error"))


@views_bp.route("/tasks/<task_id>/edit", methods=["POST"])
def edit_task(task_id: str):
    """
    Handle the task edit form.

    Mirrors :func:`create_task`, but sends a full update and returns to
    the task's detail page on success.
    """
    submission = TaskFormSubmission.from_form(request.form)
    validation_error = submission.validate()
    if validation_error:
        return _render_form(submission.echo(task_id), is_edit=True, error=validation_error)

    try:
        api_client.update_task(task_id, submission.update_payload())
    except TaskApiError as error:
        logger.warning("Error updating task %s: %s", task_id, error)
        return _render_form(
            submission.echo(task_id),
            is_edit=True,
            error=_upstream_message(error, UPDATE_FAILED),
        )

    return _redirect_to_detail(task_id, success="updated")


@views_bp.route("/tasks/<task_id>/status", methods=["POST"])
def update_status(task_id: str):
    """Quick status change; always redirects back to the detail page."""
    try:
        api_client.update_task_status(task_id, request.form.get("status"))
    except TaskApiError as error:
        logger.warning("Error updating status of task %s: %s", task_id, error)
        return _redirect_to_detail(task_id, error="status-update-failed")

    return _redirect_to_detail(task_id, success="status-updated")


@views_bp.route("/tasks/<task_id>/delete", methods=["GET"])
def delete_task_confirm(task_id: str):
    """Render the delete confirmation page."""
    try:
        task = api_client.get_task(task_id)
    except TaskApiError as error:
        logger.warning("Error fetching task %s for delete: %s", task_id, error)
        return _redirect_to_list(error="not-found")

    return render_template("tasks/delete_confirm.html", task=task_view(task))


@views_bp.route("/tasks/<task_id>/delete", methods=["POST"])
def delete_task(task_id: str):
    """Delete a task and return to the list."""
    try:
        api_client.delete_task(task_id)
    except TaskApiError as error:
        logger.warning("Error deleting task %s: %s", task_id, error)
        return _redirect_to_list(error="delete-failed")

    return _redirect_to_list(success="deleted")
