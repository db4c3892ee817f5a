"""Global pytest fixtures and default marks for SPILLWAY."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers.fakes import FakeTempFileProvider, RecordingPagePool

# pylint: disable=unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()
SUITE_MARKERS = ("unit", "integration", "contract", "e2e")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each item with the suite folder it lives in (`tests/<suite>/...`)."""
    for item in items:
        try:
            suite = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        if suite not in SUITE_MARKERS:
            continue
        if not any(marker.name == suite for marker in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, suite))


@pytest.fixture
def fake_provider() -> FakeTempFileProvider:
    """Temp file provider that hands out in-memory files."""
    return FakeTempFileProvider()


@pytest.fixture
def recording_pool() -> RecordingPagePool:
    """Tiny-page pool (4 bytes) that records acquires and releases."""
    return RecordingPagePool(page_size=4)
