"""Pytest fixtures for page pool contract tests.

Provided fixtures
-----------------
- **pool**: Parametrized factory that returns a **fresh** `PagePool` per test
  for every implementation: `"shared"` (`SharedPagePool`) and `"allocating"`
  (`AllocatingPagePool`). Both use a 16-byte page so tests stay small.
"""

from __future__ import annotations

import pytest

from spillway.adapters.page_pool.allocating import AllocatingPagePool
from spillway.adapters.page_pool.shared import SharedPagePool
from spillway.interfaces.page_pool import PagePool

PAGE_SIZE = 16


@pytest.fixture(params=["shared", "allocating"])
def pool(request: pytest.FixtureRequest) -> PagePool:
    """Return a fresh page pool for the requested implementation."""

    match request.param:
        case "shared":
            return SharedPagePool(page_size=PAGE_SIZE)
        case "allocating":
            return AllocatingPagePool(page_size=PAGE_SIZE)
        case _:
            raise ValueError(f"unknown pool type: {request.param}")
