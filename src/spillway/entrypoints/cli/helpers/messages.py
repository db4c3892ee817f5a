"""Terminal message helpers for the SPILLWAY CLI.

Messages go to stderr so that spooled bytes on stdout stay untouched. Glyphs
fall back to ASCII on terminals that cannot encode them.
"""

import click


def _glyph(emoji: str, fallback: str) -> str:
    """Return `emoji` if stderr can encode it, otherwise `fallback`."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        emoji.encode(encoding)
    except UnicodeEncodeError:
        return fallback
    return emoji


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr**.

    Example:
        ``⚠️  Buffered content spilled to disk.``
    """
    click.secho(f"{_glyph('⚠️', '[!]')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to **stderr**.

    Example:
        ``✅  Spooled 1024 bytes.``
    """
    click.secho(f"{_glyph('✅', '[OK]')}  {msg}", fg="green", bold=True, err=True)
