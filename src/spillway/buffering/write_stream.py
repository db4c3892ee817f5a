"""File-buffering write stream.

A write-only stream that keeps written bytes in a `PagedByteBuffer` while they
fit under a memory threshold and spills them to a temporary file once a write
would exceed it, while enforcing an absolute limit on the total number of
bytes accepted across both tiers.

Tiers
-----
- **Memory tier**: the newest bytes, never more than `memory_threshold`.
- **Disk tier**: a temp file created lazily, at most once, by the configured
  `TempFileProvider`. Once it exists it is kept until disposal (promotion is
  one-way). Whenever a write would overflow the memory tier, the memory pages
  are moved into the file and the write follows them there.

So the file always holds *older* bytes than the memory tier, and copy-out
emits the file first and the pages second.

Sync and async
--------------
Every operation has a blocking form and an awaitable form built around the
same admission logic. The awaitable forms run the disk-touching leaves
(creating the file, spilling, each chunk of a file copy, teardown) through
`asyncio.to_thread`. Pure memory work completes without suspending.

Cancellation
------------
The tracked file length is updated inside the worker function once the disk
write has returned, never by the awaiting coroutine. A cancelled
`write_async` therefore cannot double-count bytes: whatever reached the file
is counted exactly once. After a cancelled `write_async` the only supported
calls are `close()` and `aclose()`. A file created by a worker that finishes
after disposal is discarded by that worker.

Typical usage
-------------
    with FileBufferingWriteStream(memory_threshold=64 * 1024) as stream:
        for chunk in producer():
            stream.write(chunk)
        stream.copy_to(sink)
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
import threading
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, BinaryIO

from spillway.adapters.tempfiles.local import LocalTempFileProvider
from spillway.config import DEFAULT_COPY_CHUNK_SIZE, DEFAULT_MEMORY_THRESHOLD

from .errors import BufferLimitExceeded, StreamDisposedError
from .paged_buffer import PagedByteBuffer

if TYPE_CHECKING:
    from spillway.interfaces.page_pool import PagePool
    from spillway.interfaces.tempfile_provider import TempFileProvider

__all__ = ["FileBufferingWriteStream"]

logger = logging.getLogger(__name__)


class FileBufferingWriteStream:  # pylint: disable=too-many-instance-attributes
    """Write-only stream buffering to memory first, then to a temp file.

    Args:
        memory_threshold: Maximum number of bytes held in memory before
            writes spill to disk. Must not be negative.
        buffer_limit: Maximum number of bytes the stream accepts overall, or
            None for no limit. Must be at least `memory_threshold`.
        tempfile_provider: Creates the backing file on first spill. Defaults
            to a `LocalTempFileProvider`.
        page_pool: Pool backing the memory tier. Defaults to the shared pool.
        copy_chunk_size: Read size used when copying the backing file out.

    Raises:
        ValueError: If the thresholds or the chunk size are out of range.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        memory_threshold: int = DEFAULT_MEMORY_THRESHOLD,
        buffer_limit: int | None = None,
        tempfile_provider: TempFileProvider | None = None,
        *,
        page_pool: PagePool | None = None,
        copy_chunk_size: int = DEFAULT_COPY_CHUNK_SIZE,
    ) -> None:
        if memory_threshold < 0:
            raise ValueError(
                f"memory_threshold must not be negative, got {memory_threshold}"
            )
        if buffer_limit is not None and buffer_limit < memory_threshold:
            raise ValueError(
                "buffer_limit must be greater than or equal to memory_threshold "
                f"({buffer_limit} < {memory_threshold})"
            )
        if copy_chunk_size <= 0:
            raise ValueError(f"copy_chunk_size must be positive, got {copy_chunk_size}")

        self._memory_threshold = memory_threshold
        self._buffer_limit = buffer_limit
        self._tempfile_provider = (
            tempfile_provider
            if tempfile_provider is not None
            else LocalTempFileProvider()
        )
        self._copy_chunk_size = copy_chunk_size
        self._paged_buffer = PagedByteBuffer(page_pool)
        self._file: BinaryIO | None = None
        self._file_length = 0
        self._disposed = False
        # guards the disposed flag against a spill worker attaching a new file
        self._lock = threading.Lock()

    # --- Properties ---

    @property
    def memory_threshold(self) -> int:
        return self._memory_threshold

    @property
    def buffer_limit(self) -> int | None:
        return self._buffer_limit

    @property
    def length(self) -> int:
        """Total bytes buffered across memory and disk.

        Raises:
            StreamDisposedError: If the stream has been disposed.
        """
        self._ensure_not_disposed()
        return self._paged_buffer.length + self._file_length

    @property
    def spilled(self) -> bool:
        """Return True once the stream has created its backing file."""
        return self._file is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def closed(self) -> bool:
        return self._disposed

    @property
    def paged_buffer(self) -> PagedByteBuffer:
        """The memory tier (read access for inspection)."""
        return self._paged_buffer

    @property
    def backing_file(self) -> BinaryIO | None:
        """The disk tier, or None while the stream is memory-only."""
        return self._file

    # --- File-like surface ---

    def writable(self) -> bool:
        return True

    def readable(self) -> bool:
        return False

    def seekable(self) -> bool:
        return False

    def read(self, size: int = -1) -> bytes:
        raise io.UnsupportedOperation("read")

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        raise io.UnsupportedOperation("seek")

    def flush(self) -> None:
        """No-op; content is only materialized through `copy_to`."""
        self._ensure_not_disposed()

    # --- Write path ---

    def write(self, data: bytes) -> int:
        """Buffer `data`, spilling to the backing file if it no longer fits.

        Args:
            data: Any bytes-like object.

        Returns:
            int: The number of bytes written (always ``len(data)``).

        Raises:
            StreamDisposedError: If the stream has been disposed.
            BufferLimitExceeded: If the write would pass `buffer_limit`. The
                stream is disposed before this is raised and nothing of
                `data` is written.
            OSError: If the backing file cannot be created or written.
        """
        view = memoryview(data).cast("B")
        if self._admit(len(view)):
            self._paged_buffer.add(view)
        else:
            self._spill(view)
        return len(view)

    async def write_async(self, data: bytes) -> int:
        """Awaitable form of `write`; only the spill to disk suspends."""
        view = memoryview(data).cast("B")
        if self._admit(len(view)):
            self._paged_buffer.add(view)
        else:
            await asyncio.to_thread(self._spill, view)
        return len(view)

    def _admit(self, count: int) -> bool:
        """Apply the disposed and limit checks for a write of `count` bytes.

        Returns:
            bool: True if the bytes fit in the memory tier, False if the write
            must spill to the backing file.
        """
        self._ensure_not_disposed()
        if (
            self._buffer_limit is not None
            and self._paged_buffer.length + self._file_length + count
            > self._buffer_limit
        ):
            self.close()
            raise BufferLimitExceeded()
        return self._paged_buffer.length + count <= self._memory_threshold

    def _spill(self, view: memoryview) -> None:
        self._ensure_not_disposed()
        file = self._ensure_file()
        try:
            file.seek(self._file_length)
            self._paged_buffer.move_to(file)
            file.write(view)
        finally:
            if not file.closed:
                self._file_length = file.tell()

    def _ensure_file(self) -> BinaryIO:
        if self._file is None:
            handle: BinaryIO | None = self._tempfile_provider.create()
            with self._lock:
                if not self._disposed:
                    self._file, handle = handle, None
            if handle is not None:
                _discard(handle)
                raise StreamDisposedError(type(self).__name__)
            logger.debug(
                "Spilling to %s after %d bytes in memory",
                getattr(self._file, "name", "<anonymous>"),
                self._paged_buffer.length,
            )
        return self._file

    # --- Read-back path ---

    def copy_to(self, destination: BinaryIO) -> None:
        """Write everything buffered so far, in order, to `destination`.

        Non-destructive: the call can be repeated and yields the same bytes.

        Raises:
            StreamDisposedError: If the stream has been disposed.
            OSError: If the backing file cannot be read.
        """
        self._ensure_not_disposed()
        self._copy_file_to(destination)
        self._paged_buffer.copy_to(destination, clear_buffers=False)

    async def copy_to_async(self, destination: BinaryIO) -> None:
        """Awaitable form of `copy_to`; each file chunk is read off the loop."""
        self._ensure_not_disposed()
        await self._copy_file_to_async(destination)
        self._paged_buffer.copy_to(destination, clear_buffers=False)

    def drain_to(self, destination: BinaryIO) -> None:
        """Move everything buffered to `destination`, then dispose the stream.

        Unlike `copy_to`, memory pages are released as soon as they are written.
        """
        self._ensure_not_disposed()
        try:
            self._copy_file_to(destination)
            self._paged_buffer.move_to(destination)
        finally:
            self.close()

    async def drain_to_async(self, destination: BinaryIO) -> None:
        """Awaitable form of `drain_to`."""
        self._ensure_not_disposed()
        try:
            await self._copy_file_to_async(destination)
            self._paged_buffer.move_to(destination)
        finally:
            await self.aclose()

    def _copy_file_to(self, destination: BinaryIO) -> None:
        if self._file is None:
            return
        offset = 0
        try:
            while copied := self._copy_file_chunk(destination, offset):
                offset += copied
        finally:
            self._file.seek(self._file_length)

    async def _copy_file_to_async(self, destination: BinaryIO) -> None:
        if self._file is None:
            return
        # the write path seeks to the tracked end itself, so a cancelled copy
        # never leaves the cursor where the next spill would overwrite data
        offset = 0
        while copied := await asyncio.to_thread(
            self._copy_file_chunk, destination, offset
        ):
            offset += copied

    def _copy_file_chunk(self, destination: BinaryIO, offset: int) -> int:
        if self._file is None or offset >= self._file_length:
            return 0
        self._file.seek(offset)
        chunk = self._file.read(min(self._copy_chunk_size, self._file_length - offset))
        if chunk:
            destination.write(chunk)
        return len(chunk)

    # --- Disposal ---

    def close(self) -> None:
        """Release the memory pages and delete the backing file.

        Idempotent. Failures while closing or deleting the backing file are
        ignored so they never mask the error that triggered disposal.
        """
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            file, self._file = self._file, None
        buffered = self._paged_buffer.length + self._file_length
        self._paged_buffer.close()
        if file is not None:
            _discard(file)
        logger.debug("Disposed buffering stream holding %d bytes", buffered)

    async def aclose(self) -> None:
        """Awaitable form of `close`; file teardown runs off the event loop."""
        if self._disposed:
            return
        if self._file is None:
            self.close()
        else:
            await asyncio.to_thread(self.close)

    def __enter__(self) -> "FileBufferingWriteStream":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> "FileBufferingWriteStream":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _ensure_not_disposed(self) -> None:
        if self._disposed:
            raise StreamDisposedError(type(self).__name__)


def _discard(file: BinaryIO) -> None:
    """Close `file` and remove it from storage, ignoring failures."""
    name = getattr(file, "name", None)
    try:
        file.close()
    except OSError as e:
        logger.debug("Ignoring failure to close temp file %s: %s", name, e)
    if isinstance(name, (str, os.PathLike)):
        try:
            Path(name).unlink(missing_ok=True)
        except OSError as e:
            logger.debug("Ignoring failure to delete temp file %s: %s", name, e)
