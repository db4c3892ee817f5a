"""``spillway spool``: buffer a byte stream, then copy it out.

Reads SOURCE (stdin by default) chunk by chunk into a
`FileBufferingWriteStream`, then copies the buffered content to OUTPUT
(stdout by default). With ``--digest`` the content is copied out a second
time into a SHA-256 hasher and ``sha256:<hex>`` is printed to stderr.

Failure modes
- Input larger than ``--buffer-limit`` → ``ClickException``; the partial
  buffer (and its temp file, if any) is already gone.
- Missing temp directory or I/O failure while spilling → ``ClickException``.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import BinaryIO

import click

from spillway import config
from spillway.adapters.tempfiles.local import LocalTempFileProvider
from spillway.buffering import BufferLimitExceeded, FileBufferingWriteStream

from .helpers import success, warn

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class _DigestSink:
    """Write-only sink that hashes everything written to it."""

    def __init__(self) -> None:
        self._hasher = hashlib.sha256()

    def write(self, data: bytes) -> int:
        self._hasher.update(data)
        return len(data)

    @property
    def digest(self) -> str:
        return f"sha256:{self._hasher.hexdigest()}"


def _resolve_limits(
    memory_threshold: int | None, buffer_limit: int | None
) -> tuple[int, int | None]:
    """Fill unset sizes from the environment via `spillway.config`."""
    try:
        if memory_threshold is None:
            memory_threshold = config.get_memory_threshold()
        if buffer_limit is None:
            buffer_limit = config.get_buffer_limit()
    except config.InvalidSettingError as e:
        raise click.UsageError(str(e)) from e
    return memory_threshold, buffer_limit

@click.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option(
    "-o",
    "--output",
    type=click.File("wb"),
    default="-",
    help="Where to copy the buffered content (default: stdout).",
)
@click.option(
    "--memory-threshold",
    type=click.IntRange(min=0),
    default=None,
    help=(
        "Bytes kept in memory before spilling to a temp file "
        f"[env var: {config.MEMORY_THRESHOLD_ENV}; "
        f"default: {config.DEFAULT_MEMORY_THRESHOLD}]."
    ),
)
@click.option(
    "--buffer-limit",
    type=click.IntRange(min=0),
    default=None,
    help=(
        "Maximum number of bytes to accept "
        f"[env var: {config.BUFFER_LIMIT_ENV}; default: unbounded]."
    ),
)
@click.option(
    "--temp-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    envvar=config.TEMP_DIR_ENV,
    show_envvar=True,
    help="Directory for the spill file (default: the platform temp directory).",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=DEFAULT_CHUNK_SIZE,
    show_default=True,
    help="Read size used when consuming SOURCE.",
)
@click.option(
    "--digest/--no-digest",
    default=False,
    help="Print the SHA-256 digest of the buffered content to stderr.",
)
def spool(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    source: BinaryIO,
    output: BinaryIO,
    memory_threshold: int | None,
    buffer_limit: int | None,
    temp_dir: Path | None,
    chunk_size: int,
    digest: bool,
) -> None:
    """Buffer SOURCE through memory and disk, then copy it to OUTPUT."""
    memory_threshold, buffer_limit = _resolve_limits(memory_threshold, buffer_limit)
    if buffer_limit is not None and buffer_limit < memory_threshold:
        raise click.BadParameter(
            "must be greater than or equal to --memory-threshold",
            param_hint="--buffer-limit",
        )

    provider = LocalTempFileProvider(temp_dir)
    with FileBufferingWriteStream(
        memory_threshold=memory_threshold,
        buffer_limit=buffer_limit,
        tempfile_provider=provider,
    ) as stream:
        try:
            for chunk in iter(lambda: source.read(chunk_size), b""):
                stream.write(chunk)
        except BufferLimitExceeded as e:
            raise click.ClickException(
                f"{e} Input is larger than --buffer-limit ({buffer_limit} bytes)."
            ) from e
        except OSError as e:
            raise click.ClickException(f"Cannot buffer input: {e}") from e

        total = stream.length
        logger.info(
            "Buffered %d bytes (%s)",
            total,
            "spilled to disk" if stream.spilled else "memory only",
        )
        if stream.spilled:
            warn(f"Input exceeded {memory_threshold} bytes and was spilled to disk.")

        stream.copy_to(output)
        output.flush()

        if digest:
            sink = _DigestSink()
            stream.copy_to(sink)  # type: ignore[arg-type]
            click.echo(sink.digest, err=True)

    success(f"Spooled {total} bytes.")
