"""Graceful Ctrl+C / SIGTERM handling for batch scans."""

from __future__ import annotations

import signal
import threading
from typing import Any


class ShutdownHandler:
    """Turns the first SIGINT/SIGTERM into a shutdown flag; the second aborts.

    Also satisfies the orchestrator's cancel-token protocol via ``is_set``,
    so in-process analyses can be abandoned with the same flag.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._previous: dict[int, Any] = {}

    def __enter__(self) -> ShutdownHandler:
        self.install()
        return self

    def __exit__(self, *exc: object) -> None:
        self.uninstall()

    @property
    def is_shutting_down(self) -> bool:
        return self._event.is_set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def request_shutdown(self) -> None:
        self._event.set()

    def _handle(self, signum: int, frame: object) -> None:
        if self._event.is_set():
            for sig in self._previous:
                signal.signal(sig, signal.SIG_DFL)
            raise KeyboardInterrupt
        self._event.set()

    def install(self) -> None:
        # signal.signal only works from the main thread
        if threading.current_thread() is not threading.main_thread():
            return
        for sig in (signal.SIGINT, signal.SIGTERM):
            self._previous[sig] = signal.getsignal(sig)
            signal.signal(sig, self._handle)

    def uninstall(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        for sig, previous in self._previous.items():
            if previous is not None:
                signal.signal(sig, previous)
        self._previous.clear()


def worker_init() -> None:
    """Process-pool initializer: workers ignore SIGINT so the parent controls shutdown."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)
