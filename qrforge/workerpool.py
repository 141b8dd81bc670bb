"""A bounded pool of worker threads that processes jobs and keeps their order."""

from __future__ import annotations

import queue
import threading
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")

_SENTINEL = object()
_POLL_SECONDS = 0.01


class JobCancelledError(RuntimeError):
    """Set as the error of jobs skipped because processing was cancelled."""


@dataclass
class JobResult(Generic[T, R]):
    """Outcome of one job; ``elapsed`` is in seconds when durations are tracked."""

    index: int
    job: T
    value: R | None = None
    error: BaseException | None = None
    elapsed: float = 0.0


class AggregateError(Exception):
    """Raised when one or more jobs fail; holds every result."""

    def __init__(
        self,
        errors: Mapping[int, BaseException],
        total: int,
        results: Iterable[JobResult] = (),
    ) -> None:
        self.errors = dict(errors)
        self.total = total
        self.results = list(results)
        super().__init__(str(self))
        self.__cause__ = self.first()

    def __str__(self) -> str:
        if not self.errors:
            return "workerpool: 0 of 0 jobs failed"
        return f"workerpool: {len(self.errors)} of {self.total} jobs failed"

    def first(self) -> BaseException | None:
        """The error of the lowest-numbered failed job, or None."""
        if not self.errors:
            return None
        return self.errors[min(self.errors)]


class WorkerPool(Generic[T, R]):
    """Processes jobs with at most ``workers`` threads at once.

    ``buffer_size`` 0 queues every job up front; a positive size bounds the
    queue so that feeding waits for the workers.
    """

    def __init__(
        self, workers: int = 1, *, track_durations: bool = False, buffer_size: int = 0
    ) -> None:
        self.workers = workers if workers > 0 else 1
        self.track_durations = track_durations
        self.buffer_size = buffer_size

    def process(
        self, jobs: Iterable[T], fn: Callable[[T], R], cancel=None
    ) -> list[JobResult[T, R]]:
        """Run ``fn`` on every job and return results in job order.

        ``cancel`` is an object with ``is_set()``, checked before each job is
        queued and started. Raises AggregateError if any job failed or was
        cancelled.
        """
        items = list(jobs)
        n = len(items)
        if n == 0:
            return []

        def cancelled() -> bool:
            return cancel is not None and cancel.is_set()

        capacity = n if self.buffer_size <= 0 else min(self.buffer_size, n)
        work: queue.Queue = queue.Queue(maxsize=capacity)
        results: list[JobResult[T, R] | None] = [None] * n
        track = self.track_durations

        def worker() -> None:
            while True:
                item = work.get()
                if item is _SENTINEL:
                    return
                index, job = item
                if cancelled():
                    results[index] = JobResult(index, job, error=JobCancelledError("job cancelled"))
                    continue
                start = time.perf_counter()
                value: R | None = None
                error: BaseException | None = None
                try:
                    value = fn(job)
                except Exception as exc:
                    error = exc
                elapsed = time.perf_counter() - start if track else 0.0
                results[index] = JobResult(index, job, value, error, elapsed)

        threads = [threading.Thread(target=worker, daemon=True) for _ in range(min(self.workers, n))]
        for thread in threads:
            thread.start()
        for index, job in enumerate(items):
            queued = False
            while not queued and not cancelled():
                try:
                    work.put((index, job), timeout=_POLL_SECONDS)
                    queued = True
                except queue.Full:
                    pass
            if not queued:
                break
        for _ in threads:
            work.put(_SENTINEL)
        for thread in threads:
            thread.join()

        final = [
            result
            if result is not None
            else JobResult(index, items[index], error=JobCancelledError("job cancelled"))
            for index, result in enumerate(results)
        ]
        errors = {r.index: r.error for r in final if r.error is not None}
        if errors:
            raise AggregateError(errors, n, final)
        return final