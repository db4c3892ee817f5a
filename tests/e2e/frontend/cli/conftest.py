"""Fixtures for end-to-end tests of the ``spillway`` CLI.

- `registered_log_demo` temporarily adds a ``log-demo`` subcommand that emits
  one record per level on ``spillway.demo`` and a few on a third-party logger,
  so logging flags can be checked without spooling anything.
- `runner` / `fs` give a `CliRunner` and an isolated working directory.
- `payload_file` writes a deterministic input file into that directory.
"""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from spillway.entrypoints.cli.main import spillway

# pylint: disable=redefined-outer-name

PAYLOAD_SIZE = 100_000


@click.command()
def log_demo():
    """Emit one record per level, then a trailing DEBUG record."""
    logger = logging.getLogger("spillway.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Drop `name` from the group and from click-extra's help sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register ``log-demo`` on the `spillway` group for one test."""
    spillway.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(spillway, "log-demo")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside ``runner.isolated_filesystem()``."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def payload_file(fs) -> Path:
    """Write `PAYLOAD_SIZE` patterned bytes to ``input.bin`` and return its path."""
    path = Path("input.bin")
    path.write_bytes(bytes(i % 251 for i in range(PAYLOAD_SIZE)))
    return path
