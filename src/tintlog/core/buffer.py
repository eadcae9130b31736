"""Pooled scratch buffers for rendering log lines.

Each rendered line is built in a single ``Buffer`` borrowed from a pool and
returned after the write, so steady-state logging reuses the same few
buffers instead of allocating a new one per record.
"""

import threading
from collections.abc import Generator
from contextlib import AbstractContextManager, contextmanager

from tintlog.core.color import Color


class Buffer(bytearray):
    """Growable byte sequence used to build one log line."""

    def write(self, data: bytes) -> int:
        self += data
        return len(data)

    def write_string(self, text: str) -> int:
        data = text.encode("utf-8", errors="replace")
        self += data
        return len(data)

    def write_color(self, color: Color) -> None:
        self += color.value.encode()

    def reset_color(self) -> None:
        self += Color.RESET.value.encode()

    def reset(self) -> None:
        """Truncate to zero length, keeping the object for reuse."""
        del self[:]


class BufferPool:
    """Thread-safe free list of ``Buffer`` objects.

    Args:
        max_idle: Maximum number of released buffers kept for reuse.
            Buffers released beyond that are dropped.
    """

    def __init__(self, max_idle: int = 64) -> None:
        self._lock = threading.Lock()
        self._free: list[Buffer] = []
        self._max_idle = max_idle

    def acquire(self) -> Buffer:
        """Take an empty buffer from the pool, creating one if none is idle."""
        with self._lock:
            if self._free:
                return self._free.pop()
        return Buffer()

    def release(self, buf: Buffer) -> None:
        """Reset ``buf`` and hand it back to the pool."""
        buf.reset()
        with self._lock:
            if len(self._free) < self._max_idle:
                self._free.append(buf)

    @contextmanager
    def borrow(self) -> Generator[Buffer]:
        """Context manager that acquires a buffer and always releases it.

        Yields:
            An empty Buffer, released on every exit path.
        """
        buf = self.acquire()
        try:
            yield buf
        finally:
            self.release(buf)

    def idle_count(self) -> int:
        with self._lock:
            return len(self._free)


_pool = BufferPool()


def borrow() -> AbstractContextManager[Buffer]:
    """Borrow a buffer from the process-wide pool."""
    return _pool.borrow()
