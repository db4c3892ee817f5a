"""CLI helpers for SPILLWAY.

Utilities used by the command-line interface: the ``-L NAME=LEVEL`` parser and
message emitters that write to stderr with emoji→ASCII fallbacks.
"""

from .log_level_parser import parse_log_level
from .messages import success, warn

__all__ = ["parse_log_level", "success", "warn"]
