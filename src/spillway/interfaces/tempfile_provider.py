"""Temp file provider interface definitions."""

import abc
import os
from typing import BinaryIO

PathLike = str | os.PathLike[str]


class TempFileProvider(abc.ABC):
    """Abstract factory for scratch files that back a buffering stream.

    The provider owns *creation and placement* only. Whoever receives the
    handle owns it exclusively and is responsible for closing it and removing
    it from storage.
    """

    @abc.abstractmethod
    def create(self) -> BinaryIO:
        """Create a fresh scratch file.

        Returns:
            BinaryIO: A binary handle open for reading and writing, seekable,
            positioned at offset 0, and not shared with any other open
            temp file. If it has a filesystem path, ``handle.name`` holds it.

        Raises:
            OSError: If the file cannot be created.
        """
