"""Paged in-memory byte buffer.

Holds written bytes as a sequence of fixed-size pages borrowed from a
`PagePool` instead of one large, repeatedly reallocated buffer.

Invariants
----------
- Every page except possibly the last is completely full.
- The last page's used length never exceeds the page size.
- `length` is always exactly the sum of the pages' used lengths, including
  after a destination write fails part way through a destructive copy.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO

from spillway.adapters.page_pool.shared import SHARED_PAGE_POOL

from .errors import StreamDisposedError

if TYPE_CHECKING:
    from spillway.interfaces.page_pool import PagePool

__all__ = ["PagedByteBuffer"]


@dataclass
class _Page:
    block: bytearray
    used: int = 0


class PagedByteBuffer:
    """Append-only byte buffer made of pooled, fixed-size pages."""

    def __init__(self, pool: PagePool | None = None) -> None:
        self._pool = pool if pool is not None else SHARED_PAGE_POOL
        self._page_size = self._pool.page_size
        self._pages: deque[_Page] = deque()
        self._length = 0
        self._disposed = False

    @property
    def length(self) -> int:
        """Total number of logical bytes held. O(1)."""
        return self._length

    @property
    def page_size(self) -> int:
        """Size in bytes of each page."""
        return self._page_size

    @property
    def page_count(self) -> int:
        """Number of pages currently held."""
        return len(self._pages)

    @property
    def disposed(self) -> bool:
        """Return True once `close()` has run."""
        return self._disposed

    def __len__(self) -> int:
        return self._length

    def add(self, data: bytes) -> None:
        """Append `data`, filling the last page before acquiring a new one.

        Args:
            data: Any bytes-like object. Empty input is a no-op.

        Raises:
            StreamDisposedError: If the buffer has been closed.
        """
        self._ensure_not_disposed()
        view = memoryview(data).cast("B")
        total = len(view)
        offset = 0
        while offset < total:
            page = self._writable_page()
            count = min(self._page_size - page.used, total - offset)
            page.block[page.used : page.used + count] = view[offset : offset + count]
            page.used += count
            self._length += count
            offset += count

    def copy_to(self, destination: BinaryIO, clear_buffers: bool = False) -> None:
        """Write the full content, in order, to `destination`.

        Args:
            destination: Anything with a blocking ``write(bytes)`` method.
            clear_buffers: If True, release each page back to the pool right
                after writing it, leaving the buffer empty. If False, content
                and length are left untouched so the copy can be repeated.

        Raises:
            StreamDisposedError: If the buffer has been closed.
        """
        self._ensure_not_disposed()
        if not clear_buffers:
            for page in self._pages:
                destination.write(memoryview(page.block)[: page.used])
            return

        # pop only after a successful write so a failing destination leaves
        # the remaining pages (and length) consistent
        while self._pages:
            page = self._pages[0]
            destination.write(memoryview(page.block)[: page.used])
            self._pages.popleft()
            self._length -= page.used
            self._pool.release(page.block)

    def move_to(self, destination: BinaryIO) -> None:
        """Write the full content to `destination` and empty the buffer."""
        self.copy_to(destination, clear_buffers=True)

    def close(self) -> None:
        """Release every page back to the pool. Safe to call multiple times."""
        if self._disposed:
            return
        self._disposed = True
        self._release_all()

    # --- Internal Helpers ---

    def _writable_page(self) -> _Page:
        if self._pages and self._pages[-1].used < self._page_size:
            return self._pages[-1]
        page = _Page(self._pool.acquire())
        self._pages.append(page)
        return page

    def _release_all(self) -> None:
        while self._pages:
            self._pool.release(self._pages.popleft().block)
        self._length = 0

    def _ensure_not_disposed(self) -> None:
        if self._disposed:
            raise StreamDisposedError(type(self).__name__)
