"""Interfaces (capability boundary) for SPILLWAY.

Defines the framework-free contracts the buffering core depends on: the page
pool that backs the memory tier and the temp file provider that backs the
disk tier.

Dependency rule: this package is independent; do not import from any other
`spillway.*` modules. It may be imported by `spillway.buffering` and
`spillway.adapters`.
"""

from .page_pool import PagePool
from .tempfile_provider import TempFileProvider

__all__ = ["PagePool", "TempFileProvider"]
