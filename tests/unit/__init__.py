"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real files: streams spill into `FakeTempFileProvider`'s in-memory handles.
- Use `RecordingPagePool` when page acquire/release counts matter.
- Keep tests small, fast, and deterministic.
"""
