"""Integration tests.

Purpose
- Wire the bootstrap, the configuration resolver and the packaged defaults
  together against real files in temporary directories.

Guidelines
- Control the process environment explicitly (pass ``environ=``).
- The cluster stays fake; nothing here opens a socket.
- Marked as 'integration' by the local conftest.
"""
