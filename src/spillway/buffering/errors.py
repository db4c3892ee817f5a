"""Errors raised by the buffering core."""

BUFFER_LIMIT_EXCEEDED_MESSAGE = "Buffer limit exceeded."


class BufferingError(Exception):
    """Base class for all buffering errors."""


class BufferLimitExceeded(BufferingError, OSError):
    """Raised when a write would push the stream past its buffer limit.

    The stream is already disposed by the time this is raised; the caller has
    nothing left to clean up.
    """

    def __init__(self, message: str = BUFFER_LIMIT_EXCEEDED_MESSAGE) -> None:
        super().__init__(message)


class StreamDisposedError(BufferingError, ValueError):
    """Raised when a disposed stream or buffer is used."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot access a disposed {name}.")
