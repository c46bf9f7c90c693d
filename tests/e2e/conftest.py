"""
Playwright fixtures for the task frontend browser journeys.

The journeys create, change and delete real tasks, so they need both a
running frontend (``TEST_BASE_URL``, set by ``scripts/run_e2e.py``) and a
reachable Task API behind it. When either is missing the whole suite is
skipped before a browser is launched.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta

import pytest
import requests

from shared.live_stack import live_server_url
from tests.e2e.pages.delete_confirm_page import DeleteConfirmPage
from tests.e2e.pages.task_detail_page import TaskDetailPage
from tests.e2e.pages.task_form_page import TaskFormPage
from tests.e2e.pages.task_list_page import TaskListPage

UPSTREAM_DOWN_TEXT = "Failed to load tasks"


@pytest.fixture(scope="session")
def test_run_id() -> str:
    """Unique id for the current run so created tasks never collide."""
    return uuid.uuid4().hex[:8]


@pytest.fixture(scope="session", autouse=True)
def live_server() -> str:
    """
    Return the URL of a running frontend whose Task API answers.

    Autouse so the skip happens before pytest-playwright starts a browser.
    The list page answers 200 even when the upstream is down, so the
    upstream is checked through the error message it renders.
    """
    base_url = next(live_server_url(suite_name="e2e"))
    response = requests.get(f"{base_url}/tasks", timeout=10)
    if UPSTREAM_DOWN_TEXT in response.text:
        pytest.skip("the Task API behind the frontend is unreachable; e2e journeys need a live upstream")
    return base_url


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args: dict) -> dict:
    return {
        **browser_context_args,
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }


@pytest.fixture
def future_due_date() -> str:
    """A due date a week ahead, formatted for a datetime-local input."""
    return (datetime.now() + timedelta(days=7)).strftime("%Y-%m-%dT%H:%M")


@pytest.fixture
def title_factory(test_run_id: str) -> Callable[[str], str]:
    """Factory for task titles that are unique to this run."""

    def _make(prefix: str = "Task") -> str:
        return f"E2E {test_run_id} {prefix} {uuid.uuid4().hex[:6]}"

    return _make


@pytest.fixture
def task_list_page(page, live_server: str) -> TaskListPage:
    return TaskListPage(page, live_server)


@pytest.fixture
def task_form_page(page, live_server: str) -> TaskFormPage:
    return TaskFormPage(page, live_server)


@pytest.fixture
def task_detail_page(page, live_server: str) -> TaskDetailPage:
    return TaskDetailPage(page, live_server)


@pytest.fixture
def delete_confirm_page(page, live_server: str) -> DeleteConfirmPage:
    return DeleteConfirmPage(page, live_server)


@pytest.fixture
def created_task(
    task_form_page: TaskFormPage,
    task_list_page: TaskListPage,
    title_factory: Callable[[str], str],
    future_due_date: str,
) -> str:
    """
    Create a PENDING task through the UI and return its title.

    The browser is left on the list page, filtered down to the new task.
    """
    title = title_factory("Existing")
    task_form_page.create_task(
        title=title,
        description="Task created for e2e testing",
        due_date_time=future_due_date,
        priority="MEDIUM",
    )
    task_form_page.assert_url_contains("/tasks?success=created")
    task_list_page.navigate(search=title)
    return title


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture a screenshot when a browser journey fails."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        page = item.funcargs.get("page")
        if page:
            screenshot_dir = "test-results/screenshots"
            os.makedirs(screenshot_dir, exist_ok=True)
            test_name = item.name.replace("/", "_").replace("::", "_")
            screenshot_path = f"{screenshot_dir}/{test_name}.png"
            try:
                page.screenshot(path=screenshot_path)
                print(f"\nScreenshot saved: {screenshot_path}")
            except Exception as exc:  # pragma: no cover - best effort logging
                print(f"\nFailed to capture screenshot: {exc}")
