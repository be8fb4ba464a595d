"""
Mock process inspector — in-memory process table for tests.

Lets shell detection run its full fall-through logic without
spawning ``ps``.  Every query is recorded in ``call_log``.
"""

from __future__ import annotations

from cdw.adapters.process import ProcessInspector


class MockProcessInspector(ProcessInspector):
    """Process table backed by two dicts.

    Args:
        parents: pid → parent pid.  Use the key ``None`` for the probe
            process itself.
        names: pid → command name.
        available: Value returned by ``is_available``.
        error: If set, every query raises it (to exercise callers that
            must survive a misbehaving inspector).
    """

    def __init__(
        self,
        parents: dict[int | None, int] | None = None,
        names: dict[int, str] | None = None,
        available: bool = True,
        error: Exception | None = None,
    ):
        self._parents = dict(parents or {})
        self._names = dict(names or {})
        self._available = available
        self._error = error
        self._call_log: list[tuple[str, int | None]] = []

    @classmethod
    def with_ancestry(
        cls, *names: str, start: int = 100, available: bool = True,
    ) -> MockProcessInspector:
        """Build a linear chain: probe → ``names[0]`` → ``names[1]`` → …

        ``with_ancestry("cdw", "zsh")`` makes the probe's parent a
        process called ``cdw`` whose parent is ``zsh``.
        """
        parents: dict[int | None, int] = {}
        table: dict[int, str] = {}
        child: int | None = None
        for offset, proc_name in enumerate(names):
            pid = start + offset
            parents[child] = pid
            table[pid] = proc_name
            child = pid
        return cls(parents=parents, names=table, available=available)

    @property
    def call_log(self) -> list[tuple[str, int | None]]:
        """All (method, pid) queries this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def parent_id(self, pid: int | None) -> int | None:
        self._call_log.append(("parent_id", pid))
        if self._error is not None:
            raise self._error
        return self._parents.get(pid)

    def name(self, pid: int) -> str | None:
        self._call_log.append(("name", pid))
        if self._error is not None:
            raise self._error
        return self._names.get(pid)

    def reset(self) -> None:
        """Clear the call log."""
        self._call_log.clear()
