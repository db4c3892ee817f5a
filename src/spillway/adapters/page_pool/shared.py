"""Shared, thread-safe page pool.

Recycles fixed-size pages between buffers so that short-lived streams do not
allocate a fresh block for every few kilobytes they hold.

Key behaviors
-------------
- **Bounded retention**: at most `max_retained` idle pages are kept; any
  surplus released page is dropped and left to the garbage collector.
- **Idempotent release**: the pool remembers which blocks it currently holds
  (by identity), so releasing a block that is already pooled is a no-op and
  can never hand the same block to two buffers.
- **Thread-safety**: all free-list operations run under a single lock.

Typical usage
-------------
    page = SHARED_PAGE_POOL.acquire()
    ...
    SHARED_PAGE_POOL.release(page)
"""

from __future__ import annotations

import threading
from collections import deque

from spillway.config import DEFAULT_PAGE_SIZE
from spillway.interfaces.page_pool import PagePool

__all__ = ["SHARED_PAGE_POOL", "SharedPagePool"]

DEFAULT_MAX_RETAINED = 256


class SharedPagePool(PagePool):
    """Page pool backed by a lock-protected free list."""

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_retained: int = DEFAULT_MAX_RETAINED,
    ) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        if max_retained < 0:
            raise ValueError(f"max_retained must not be negative, got {max_retained}")
        self._page_size = page_size
        self._max_retained = max_retained
        self._free: deque[bytearray] = deque()
        self._pooled_ids: set[int] = set()
        self._lock = threading.Lock()

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def retained(self) -> int:
        """Number of idle pages currently held by the pool."""
        with self._lock:
            return len(self._free)

    def acquire(self) -> bytearray:
        with self._lock:
            if self._free:
                page = self._free.pop()
                self._pooled_ids.discard(id(page))
                return page
        return bytearray(self._page_size)

    def release(self, page: bytearray) -> None:
        if len(page) != self._page_size:
            raise ValueError(
                f"page is {len(page)} bytes, pool hands out {self._page_size}"
            )
        with self._lock:
            if id(page) in self._pooled_ids:
                return
            if len(self._free) >= self._max_retained:
                return
            self._free.append(page)
            self._pooled_ids.add(id(page))


SHARED_PAGE_POOL = SharedPagePool()
