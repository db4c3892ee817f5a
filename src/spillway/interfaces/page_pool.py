"""Page pool interface definitions.

A page pool hands out fixed-size, writable byte blocks ("pages") to the paged
memory buffer and takes them back once the buffer no longer needs them.
Implementations may recycle blocks or simply allocate fresh ones.

Contract:
    - `acquire()` returns a `bytearray` of exactly `page_size` bytes. The
      content of a recycled block is unspecified.
    - `release(page)` gives a block back. Releasing the same block more than
      once MUST NOT corrupt the pool.
    - Both operations MUST be safe to call concurrently from multiple threads;
      a single pool is typically shared by every buffer in the process.
"""

import abc


class PagePool(abc.ABC):
    """Abstract source of fixed-size byte pages."""

    @property
    @abc.abstractmethod
    def page_size(self) -> int:
        """Return the size in bytes of every page handed out by this pool."""

    @abc.abstractmethod
    def acquire(self) -> bytearray:
        """Return a writable page of exactly `page_size` bytes.

        Returns:
            bytearray: A block owned by the caller until it is released.
        """

    @abc.abstractmethod
    def release(self, page: bytearray) -> None:
        """Return a page previously obtained from `acquire`.

        Args:
            page: The block to give back. The caller must not use it afterwards.

        Raises:
            ValueError: If `page` is not `page_size` bytes long.
        """
