"""SPILLWAY

A write-only buffering stream that keeps small payloads in pooled memory
pages and spills larger ones to an exclusively-owned temporary file, while
enforcing a hard cap on the total number of bytes it will accept.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
