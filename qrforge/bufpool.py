"""A reusable pool of in-memory byte buffers."""

from __future__ import annotations

import io
import threading


class BufferPool:
    """Hands out empty BytesIO buffers, reusing ones that were returned."""

    def __init__(self, max_idle: int = 64) -> None:
        self._lock = threading.Lock()
        self._idle: list[io.BytesIO] = []
        self._max_idle = max_idle

    def get(self) -> io.BytesIO:
        """An empty buffer positioned at the start."""
        with self._lock:
            buffer = self._idle.pop() if self._idle else None
        if buffer is None:
            return io.BytesIO()
        buffer.seek(0)
        buffer.truncate(0)
        return buffer

    def put(self, buffer: io.BytesIO | None) -> None:
        """Return a buffer to the pool; None is ignored."""
        if buffer is None:
            return
        with self._lock:
            if len(self._idle) < self._max_idle:
                self._idle.append(buffer)