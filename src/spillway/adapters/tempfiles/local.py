"""Local filesystem temp file provider."""

import logging
import tempfile
from pathlib import Path
from typing import BinaryIO

from spillway.config import get_temp_dir
from spillway.interfaces.tempfile_provider import PathLike, TempFileProvider

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "spillway-"


class LocalTempFileProvider(TempFileProvider):
    """TempFileProvider that creates named temp files on the local filesystem.

    The directory is resolved on every `create()` call, so a provider built
    before the temp directory exists (or before `SPILLWAY_TEMP_DIR` is set)
    still picks up the right location when a stream finally spills.

    Files are created with ``delete=False``: the stream that receives the
    handle removes the file itself when it is disposed.
    """

    def __init__(
        self, directory: PathLike | None = None, prefix: str = DEFAULT_PREFIX
    ) -> None:
        self._directory = Path(directory) if directory is not None else None
        self._prefix = prefix

    @property
    def directory(self) -> Path:
        """The directory new temp files are created in."""
        return self._directory if self._directory is not None else get_temp_dir()

    def create(self) -> BinaryIO:
        directory = self.directory
        handle = tempfile.NamedTemporaryFile(  # pylint: disable=consider-using-with
            mode="w+b", dir=directory, prefix=self._prefix, delete=False  # pragma: no mutate
        )
        logger.debug("Created temp file %s", handle.name)
        return handle
