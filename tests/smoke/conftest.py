"""
Smoke-test fixtures for a running task frontend.

Provides the ``smoke_base_url`` session-scoped fixture, resolved by
:func:`shared.live_stack.live_server_url`. ``scripts/run_e2e.py`` starts a
server and sets ``TEST_BASE_URL``; without it the suite is skipped.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

from shared.live_stack import live_server_url


@pytest.fixture(scope="session")
def smoke_base_url() -> Generator[str, None, None]:
    """Yield a ready task frontend URL for smoke tests."""
    yield from live_server_url(base_url_env="TEST_BASE_URL", suite_name="smoke")
