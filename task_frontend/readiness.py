"""Process readiness state shared between the server bootstrap and health checks."""

from __future__ import annotations

import threading


class ReadinessState:
    """
    Tracks whether the process should still receive traffic.

    Owned by the process bootstrap and handed to :func:`create_app`; the
    signal handler flips it and the readiness probe reads it. Backed by a
    :class:`threading.Event` because the signal handler and request
    threads touch it concurrently.
    """

    def __init__(self) -> None:
        self._shutting_down = threading.Event()

    @property
    def is_ready(self) -> bool:
        return not self._shutting_down.is_set()

    def mark_shutting_down(self) -> None:
        self._shutting_down.set()
