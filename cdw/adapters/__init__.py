"""Adapters — bindings to the operating system.

Public re-exports for convenient access.
"""

from cdw.adapters.mock import MockProcessInspector
from cdw.adapters.process import ProcessInspector, PsProcessInspector

__all__ = [
    "MockProcessInspector",
    "ProcessInspector",
    "PsProcessInspector",
]
