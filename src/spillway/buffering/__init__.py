"""Two-tier (memory, then disk) buffering for write-only streams."""

from .errors import BufferingError, BufferLimitExceeded, StreamDisposedError
from .paged_buffer import PagedByteBuffer
from .write_stream import FileBufferingWriteStream

__all__ = [
    "BufferLimitExceeded",
    "BufferingError",
    "FileBufferingWriteStream",
    "PagedByteBuffer",
    "StreamDisposedError",
]
