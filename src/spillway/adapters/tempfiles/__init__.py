"""Temp file provider implementations."""
