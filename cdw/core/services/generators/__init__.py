"""
Generators — produce per-shell scripts for the wrapper protocol.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedFile`` for one shell dialect.
"""
