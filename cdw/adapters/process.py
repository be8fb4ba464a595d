"""
Process inspector — the only adapter shell detection talks to.

Walking the process tree is OS-specific, so detection asks a
``ProcessInspector`` instead of spawning ``ps`` itself.  The real
implementation shells out to ``ps``; tests use ``MockProcessInspector``.

Inspectors NEVER raise.  "Unknown" is always answered with None.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class ProcessInspector(ABC):
    """Abstract read-only view of the process table.

    ``pid=None`` designates the probe process itself: the process that
    performs the lookup on behalf of cdw.  Its parent is therefore cdw,
    and its grandparent is whatever launched cdw.
    """

    @abstractmethod
    def parent_id(self, pid: int | None) -> int | None:
        """Return the parent process id of ``pid``, or None if unknown."""

    @abstractmethod
    def name(self, pid: int) -> str | None:
        """Return the command name of ``pid``, or None if unknown."""

    def is_available(self) -> bool:
        """Whether this inspector can answer at all.  Never raises."""
        return True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class PsProcessInspector(ProcessInspector):
    """Answer process queries with ``ps`` run through ``sh -c``.

    Every query is a separate ``sh -c "ps -p <pid> -o <field>="``; for
    ``pid=None`` the target is ``$$``, the probe shell itself.
    """

    def __init__(self, timeout: float = 5.0):
        self._timeout = timeout

    def is_available(self) -> bool:
        return shutil.which("sh") is not None and shutil.which("ps") is not None

    def parent_id(self, pid: int | None) -> int | None:
        output = self._ps(pid, "ppid")
        if output is None:
            return None
        try:
            return int(output)
        except ValueError:
            logger.debug("Unparsable ppid for %s: %r", pid, output)
            return None

    def name(self, pid: int) -> str | None:
        return self._ps(pid, "comm")

    def _ps(self, pid: int | None, field: str) -> str | None:
        target = "$$" if pid is None else str(int(pid))
        command = f"ps -p {target} -o {field}="

        try:
            result = subprocess.run(
                ["sh", "-c", command],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug("Timed out after %ss: %s", self._timeout, command)
            return None
        except OSError as e:
            logger.debug("Cannot run %s: %s", command, e)
            return None

        if result.returncode != 0:
            logger.debug("%s exited with code %d", command, result.returncode)
            return None

        output = result.stdout.strip()
        return output or None
