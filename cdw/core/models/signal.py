"""
Dispatch outcome — what one invocation tells its wrapper function.

A child process cannot change its parent shell's working directory, so
cdw only *signals* the change: the wrapper installed in the user's
shell reads the first stdout line and performs the ``cd`` itself.

Wire contract (first line of stdout, exit code 0):

    ChangeDirectory  →  "\\a" + path      (BEL, U+0007, then the path)
    PrintValue       →  path               (no control prefix)

Wrappers must only ever interpret the first line.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

BEL = "\a"


class ChangeDirectory(BaseModel):
    """Ask the wrapper to ``cd`` into ``path``."""

    kind: Literal["cd"] = "cd"
    path: str

    def frame(self) -> str:
        return f"{BEL}{self.path}"


class PrintValue(BaseModel):
    """Ask the wrapper to show ``path`` as ordinary output."""

    kind: Literal["print"] = "print"
    path: str

    def frame(self) -> str:
        return self.path


DispatchOutcome = Annotated[ChangeDirectory | PrintValue, Field(discriminator="kind")]
