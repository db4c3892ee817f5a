"""Configuration utilities for SPILLWAY.

This module centralizes the buffering defaults and the small helpers that read
settings from the environment.
"""

import os
import tempfile
from pathlib import Path

DEFAULT_MEMORY_THRESHOLD = 32 * 1024  # 32 KiB
DEFAULT_PAGE_SIZE = 4 * 1024  # 4 KiB
DEFAULT_COPY_CHUNK_SIZE = 64 * 1024  # 64 KiB

TEMP_DIR_ENV = "SPILLWAY_TEMP_DIR"  # pragma: no mutate
MEMORY_THRESHOLD_ENV = "SPILLWAY_MEMORY_THRESHOLD"  # pragma: no mutate
BUFFER_LIMIT_ENV = "SPILLWAY_BUFFER_LIMIT"  # pragma: no mutate


class TempDirectoryNotFoundError(FileNotFoundError):
    """Raised when the configured temp directory does not exist."""


class InvalidSettingError(ValueError):
    """Raised when an environment setting cannot be parsed."""


def get_temp_dir() -> Path:
    """Return the directory in which spill files are created.

    Uses `SPILLWAY_TEMP_DIR` when set, otherwise the platform temp directory
    reported by `tempfile.gettempdir()`.

    Returns:
        The resolved directory.

    Raises:
        TempDirectoryNotFoundError: If the resolved directory does not exist.
    """
    path = Path(os.environ.get(TEMP_DIR_ENV) or tempfile.gettempdir())
    if not path.is_dir():
        raise TempDirectoryNotFoundError(f"Temp directory not found: {path}")
    return path


def _get_int(name: str) -> int | None:
    if not (raw := os.environ.get(name, "").strip()):
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidSettingError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise InvalidSettingError(f"{name} must not be negative, got {value}")
    return value


def get_memory_threshold() -> int:
    """Return the memory threshold from `SPILLWAY_MEMORY_THRESHOLD`.

    Falls back to `DEFAULT_MEMORY_THRESHOLD` when the variable is unset or empty.

    Raises:
        InvalidSettingError: If the value is not a non-negative integer.
    """
    value = _get_int(MEMORY_THRESHOLD_ENV)
    return DEFAULT_MEMORY_THRESHOLD if value is None else value


def get_buffer_limit() -> int | None:
    """Return the buffer limit from `SPILLWAY_BUFFER_LIMIT`, or None (unbounded).

    Raises:
        InvalidSettingError: If the value is not a non-negative integer.
    """
    return _get_int(BUFFER_LIMIT_ENV)
