"""
Domain models — shell dialects, dispatch outcomes, generated files.

All models are re-exported here for convenient access:

    from cdw.core.models import ShellKind, ChangeDirectory, PrintValue
"""

from cdw.core.models.shell import SHELL_ALIASES, SHELL_PROFILES, ShellKind, ShellProfile
from cdw.core.models.signal import BEL, ChangeDirectory, DispatchOutcome, PrintValue
from cdw.core.models.template import GeneratedFile

__all__ = [
    # signal.py
    "BEL",
    "ChangeDirectory",
    "DispatchOutcome",
    # template.py
    "GeneratedFile",
    "PrintValue",
    # shell.py
    "SHELL_ALIASES",
    "SHELL_PROFILES",
    "ShellKind",
    "ShellProfile",
]
