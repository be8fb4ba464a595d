"""
Shell detection — which dialect is the user running, and which are installed.

``detect()`` resolves the invoking shell in a fixed order, first match wins:

    1. PowerShell host marker     PSModulePath mentions "powershell"
    2. Process ancestry           name of cdw's launching process
    3. Shell version variables    XONSH → NU → FISH → ZSH → BASH
    4. Fallback                   sh

The order is a tie-break policy: a PowerShell host leaks its marker
into every child, and version variables are often inherited from an
outer shell, so the live process tree is trusted before them.

Nothing here raises.  A probe that fails is "no information" and the
resolution moves on.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed

from cdw.adapters.process import ProcessInspector, PsProcessInspector
from cdw.core.models.shell import SHELL_PROFILES, ShellKind

logger = logging.getLogger(__name__)

POWERSHELL_MARKER_VAR = "PSModulePath"

ENV_MARKERS: tuple[tuple[str, ShellKind], ...] = (
    ("XONSH_VERSION", ShellKind.XONSH),
    ("NU_VERSION", ShellKind.NUSHELL),
    ("FISH_VERSION", ShellKind.FISH),
    ("ZSH_VERSION", ShellKind.ZSH),
    ("BASH_VERSION", ShellKind.BASH),
)

FALLBACK_SHELL = ShellKind.SH

PROBE_TIMEOUT = 10


# ── Detection ───────────────────────────────────────────────────


def detect(
    environ: Mapping[str, str] | None = None,
    inspector: ProcessInspector | None = None,
) -> ShellKind:
    """Detect the shell cdw was invoked from.

    Args:
        environ: Environment to read (default: ``os.environ``).
        inspector: Process table view (default: ``PsProcessInspector``).

    Returns:
        The detected dialect, ``ShellKind.SH`` if nothing matched.
    """
    env = os.environ if environ is None else environ

    if _is_powershell_host(env):
        logger.debug("Detected pwsh from %s", POWERSHELL_MARKER_VAR)
        return ShellKind.POWERSHELL

    kind = detect_by_ancestry(inspector or PsProcessInspector())
    if kind is not None:
        logger.debug("Detected %s from process ancestry", kind)
        return kind

    for var, marker_kind in ENV_MARKERS:
        if var in env:
            logger.debug("Detected %s from %s", marker_kind, var)
            return marker_kind

    logger.debug("No shell detected, falling back to %s", FALLBACK_SHELL)
    return FALLBACK_SHELL


def _is_powershell_host(env: Mapping[str, str]) -> bool:
    value = env.get(POWERSHELL_MARKER_VAR)
    return value is not None and "powershell" in value.lower()


def detect_by_ancestry(inspector: ProcessInspector) -> ShellKind | None:
    """Name the grandparent of the probe process and parse it as a shell.

    The probe's parent is cdw itself; its grandparent is the process
    that launched cdw, normally the interactive shell (or the subshell
    a wrapper function forks for command substitution).
    """
    if not inspector.is_available():
        logger.debug("%r cannot inspect processes, skipping ancestry", inspector)
        return None

    try:
        parent = inspector.parent_id(None)
        if parent is None:
            return None
        grandparent = inspector.parent_id(parent)
        if grandparent is None:
            return None
        name = inspector.name(grandparent)
    except Exception as e:
        logger.debug("Process ancestry lookup failed: %s", e)
        return None

    kind = ShellKind.try_parse(name)
    if kind is None:
        logger.debug("Launching process %r is not a known shell", name)
    return kind


# ── Availability ────────────────────────────────────────────────


def probe_shell(kind: ShellKind) -> bool:
    """Check whether ``kind`` is installed by running its probe command.

    The probe must spawn, exit 0 and, where the profile demands it,
    print the expected literal output.
    """
    profile = SHELL_PROFILES[kind]
    cmd = profile.probe
    if shutil.which(cmd[0]) is None:
        return False

    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=PROBE_TIMEOUT,
        )
    except subprocess.TimeoutExpired:
        logger.debug("Probe for %s timed out", kind)
        return False
    except OSError as e:
        logger.debug("Probe for %s failed: %s", kind, e)
        return False

    if result.returncode != 0:
        logger.debug("Probe for %s exited with code %d", kind, result.returncode)
        return False

    if profile.probe_output is not None:
        return result.stdout.strip() == profile.probe_output

    return True


def enumerate_available(
    kinds: Iterable[ShellKind] | None = None,
    probe: Callable[[ShellKind], bool] = probe_shell,
) -> set[ShellKind]:
    """Return every shell whose probe succeeds.

    Probes are independent, so they run in parallel.  A probe that
    raises excludes its shell and nothing else.
    """
    candidates = list(ShellKind) if kinds is None else list(kinds)
    if not candidates:
        return set()

    available: set[ShellKind] = set()
    with ThreadPoolExecutor(max_workers=len(candidates)) as pool:
        futures = {pool.submit(probe, kind): kind for kind in candidates}
        for future in as_completed(futures):
            kind = futures[future]
            try:
                if future.result():
                    available.add(kind)
            except Exception as e:
                logger.debug("Probe for %s raised: %s", kind, e)

    logger.info("Available shells: %s", ", ".join(sorted(available)) or "none")
    return available
