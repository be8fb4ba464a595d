"""
Dispatcher — decide what one cdw invocation does and frame its output.

Modes, in precedence order when several flags are given:

    init       install the wrapper for the current shell
    init_all   install the wrapper for every installed shell
    display    print the wrapper source without installing it
    translate  convert PATH and emit the cd signal (or the plain path)
    help       nothing actionable: print help, exit 1

Only ``translate`` speaks the signal protocol.  Its output is:

    line 1   "\\a<wsl path>"  (cd)   or   "<wsl path>"  (--convert)
    line 2   "Windows path: <input>"     (--verbose only)
    line 3   "WSL path: <wsl path>"      (--verbose only)

``read_signal`` is the consumer side of the same contract: it does what
every installed wrapper function does with cdw's stdout.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum

from cdw.core.config.loader import CdwConfig
from cdw.core.models.shell import ShellKind
from cdw.core.models.signal import BEL, ChangeDirectory, PrintValue
from cdw.core.services.path_translate import DEFAULT_MOUNT_ROOT, translate
from cdw.core.services.shell_detect import detect

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    """What a single invocation does."""

    INIT = "init"
    INIT_ALL = "init_all"
    DISPLAY = "display"
    TRANSLATE = "translate"
    HELP = "help"


def select_mode(
    init: bool = False,
    init_all: bool = False,
    init_display: str | None = None,
    path: str | None = None,
) -> Mode:
    """Pick the mode from the parsed flags.

    ``init_display`` is None when the flag is absent and ``""`` when it
    was given without a shell name.
    """
    if init:
        return Mode.INIT
    if init_all:
        return Mode.INIT_ALL
    if init_display is not None:
        return Mode.DISPLAY
    if path is not None:
        return Mode.TRANSLATE
    return Mode.HELP


# ── Signal protocol ─────────────────────────────────────────────


def plan(
    path: str,
    convert: bool = False,
    mount_root: str = DEFAULT_MOUNT_ROOT,
) -> ChangeDirectory | PrintValue:
    """Translate ``path`` and wrap it in the outcome the caller asked for."""
    wsl_path = translate(path, mount_root=mount_root)
    if convert:
        return PrintValue(path=wsl_path)
    return ChangeDirectory(path=wsl_path)


def render(
    outcome: ChangeDirectory | PrintValue,
    windows_path: str,
    verbose: bool = False,
) -> list[str]:
    """Lines to write to stdout, signal line first."""
    lines = [outcome.frame()]
    if verbose:
        lines.append(f"Windows path: {windows_path}")
        lines.append(f"WSL path: {outcome.path}")
    return lines


def read_signal(stdout: str, returncode: int) -> ChangeDirectory | PrintValue | None:
    """Interpret cdw's output the way a wrapper function does.

    Returns:
        None on a non-zero exit (the wrapper must not parse the output),
        ``ChangeDirectory`` if the first line starts with BEL,
        otherwise ``PrintValue`` holding the first line.
    """
    if returncode != 0:
        return None

    first_line = stdout.partition("\n")[0].rstrip("\r")
    if first_line.startswith(BEL):
        return ChangeDirectory(path=first_line[len(BEL):])
    return PrintValue(path=first_line)


# ── Shell selection for the init modes ─────────────────────────


def resolve_shell(
    requested: str | None = None,
    config: CdwConfig | None = None,
    detector: Callable[[], ShellKind] | None = None,
) -> ShellKind | str:
    """Choose the shell an init mode works on.

    An explicit name wins; an unknown name is returned as-is so the
    template layer can answer with its "unsupported" placeholder.
    Otherwise the configured ``default_shell``, otherwise detection.
    """
    if requested:
        kind = ShellKind.try_parse(requested)
        if kind is None:
            logger.warning("Unknown shell %r", requested)
            return requested
        return kind

    if config is not None and config.default_shell is not None:
        logger.debug("Using configured default shell %s", config.default_shell)
        return config.default_shell

    return (detector or detect)()
