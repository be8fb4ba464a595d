"""
Generated file model — used by all generators.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A script produced by a template generator.

    Attributes:
        path:      File name, relative to the cdw config directory.
        content:   Full file content.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    reason: str = ""
