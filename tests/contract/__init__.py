"""Contract tests.

Purpose
- Run one set of behavioral checks against every implementation of an
  interface (currently `PagePool`) so implementations stay interchangeable.

Guidelines
- Parametrize implementations via a fixture in the suite's conftest.py.
- Assert only the public contract, not internals such as free-list size.
"""
