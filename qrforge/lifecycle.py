"""A close-once guard that other threads can wait on."""

from __future__ import annotations

import threading


class AlreadyClosedError(RuntimeError):
    """Raised when a guard is closed a second time."""

    def __init__(self, message: str = "lifecycle: already closed") -> None:
        super().__init__(message)


class Guard:
    """Tracks whether a resource has been closed; closing succeeds exactly once."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = threading.Event()

    def close(self) -> None:
        """Mark the guard closed; AlreadyClosedError if it already was."""
        with self._lock:
            if self._done.is_set():
                raise AlreadyClosedError()
            self._done.set()

    def is_closed(self) -> bool:
        """Whether ``close`` has succeeded."""
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until closed or ``timeout`` seconds pass; True if closed."""
        return self._done.wait(timeout)