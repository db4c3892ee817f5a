"""SPILLWAY command-line interface."""
