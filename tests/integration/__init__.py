"""Integration tests.

Purpose
- Exercise real temp files on the local filesystem, under pytest's `tmp_path`.

Guidelines
- Point providers at `tmp_path` (or set SPILLWAY_TEMP_DIR) so leftovers are
  visible to assertions and cleaned up by pytest.
"""
