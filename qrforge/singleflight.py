"""Duplicate call suppression: concurrent calls with one key share one execution."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any


@dataclass
class Result:
    """Outcome of a shared call."""

    value: Any = None
    error: BaseException | None = None
    shared: bool = False


class _Call:
    __slots__ = ("done", "value", "error", "dupes")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.value: Any = None
        self.error: BaseException | None = None
        self.dupes = 0


class Group:
    """Runs at most one call per key at a time; late callers wait for its result."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, _Call] = {}

    def _run(self, key: str, fn: Callable[[], Any]) -> Result:
        with self._lock:
            call = self._calls.get(key)
            leader = call is None
            if leader:
                call = _Call()
                self._calls[key] = call
            else:
                call.dupes += 1
        if not leader:
            call.done.wait()
            return Result(call.value, call.error, True)
        try:
            call.value = fn()
        except Exception as exc:
            call.error = exc
        finally:
            call.done.set()
            with self._lock:
                if self._calls.get(key) is call:
                    del self._calls[key]
        with self._lock:
            shared = call.dupes > 0
        return Result(call.value, call.error, shared)

    def do(self, key: str, fn: Callable[[], Any]) -> tuple[Any, bool]:
        """Run ``fn`` or join the call already running for ``key``.

        Returns the value and whether it was shared with other callers; an
        exception raised by ``fn`` is raised in every caller.
        """
        result = self._run(key, fn)
        if result.error is not None:
            raise result.error
        return result.value, result.shared

    def do_future(self, key: str, fn: Callable[[], Any]) -> Future:
        """Like ``do`` in a background thread; the future resolves to a Result."""
        future: Future = Future()

        def runner() -> None:
            future.set_result(self._run(key, fn))

        threading.Thread(target=runner, daemon=True).start()
        return future

    def forget(self, key: str) -> None:
        """Let the next call for ``key`` run afresh instead of joining one in flight."""
        with self._lock:
            self._calls.pop(key, None)