"""SPILLWAY test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real interactions with the local filesystem.
- contract/     : Shared behavior/invariants enforced across multiple implementations.
- e2e/          : The CLI, invoked end-to-end through Click's test runner.
- helpers/      : Shared utilities and fakes (no tests here).

General guidance
- Keep unit fast and deterministic (no real I/O); prefer fakes over mocks at boundaries.
- Integration hits the real filesystem with realistic setup/teardown.
- Contract parametrizes implementations to ensure consistent behavior.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Suite markers (unit, integration, contract, e2e) are added from the folder by conftest.py.
"""
