"""Entrypoints (inbound adapters) for SPILLWAY.

Expose the buffering stream to the outside world. Currently only the CLI.
"""
