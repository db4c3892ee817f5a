"""Non-recycling page pool."""

from spillway.config import DEFAULT_PAGE_SIZE
from spillway.interfaces.page_pool import PagePool

__all__ = ["AllocatingPagePool"]


class AllocatingPagePool(PagePool):
    """Allocates a fresh page on every acquire and drops pages on release.

    Useful when buffers are long-lived or rare enough that pooling buys
    nothing, and in tests that want to rule the free list out.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    def acquire(self) -> bytearray:
        return bytearray(self._page_size)

    def release(self, page: bytearray) -> None:
        if len(page) != self._page_size:
            raise ValueError(
                f"page is {len(page)} bytes, pool hands out {self._page_size}"
            )
