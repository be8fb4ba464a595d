"""
Shell installation — write the wrapper files and hook them into startup.

For one shell this:

    1. writes ``function.<ext>`` and ``autocomplete.<ext>`` into the
       cdw config directory (default ``~/.config/cdw``),
    2. makes sure the shell's startup file exists,
    3. appends a source line to it, unless it is already there.

Step 3 is what makes ``cdw --init`` safe to repeat, which matters
because every wrapper re-runs the real command when it gets no cd
signal back.

Failures here are setup errors: they raise ``InstallError`` and the
CLI aborts.  Nothing is retried.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel

from cdw.core.models.shell import SHELL_PROFILES, ShellKind
from cdw.core.services.generators.completion import generate_completion
from cdw.core.services.generators.wrapper import generate_wrapper

logger = logging.getLogger(__name__)

SOURCE_MARKER = "# Added by cdw"


class InstallError(Exception):
    """Raised when wrapper files or startup files cannot be written."""


class InstallResult(BaseModel):
    """What ``install()`` did for one shell."""

    shell: ShellKind
    function_file: str
    completion_file: str
    startup_file: str
    source_line: str
    appended: bool = True


def resolve_home(home: Path | str | None = None) -> Path:
    """Return ``home`` or ``$HOME``.

    Raises:
        InstallError: If neither is set.
    """
    if home is not None:
        return Path(home)
    env_home = os.environ.get("HOME")
    if not env_home:
        raise InstallError("HOME not set")
    return Path(env_home)


def default_config_dir(home: Path) -> Path:
    return home / ".config" / "cdw"


def startup_file(shell: ShellKind, home: Path) -> Path:
    """The startup file ``shell`` reads for interactive sessions."""
    return home / SHELL_PROFILES[shell].startup_file


def source_line(shell: ShellKind, function_file: Path, completion_file: Path) -> str:
    """The line that loads the installed files from the startup file.

    Only fish loads the completion file here; the other dialects pick
    completion up from the wrapper or not at all.
    """
    if shell is ShellKind.FISH:
        return f"source {function_file}; source {completion_file}"
    if shell is ShellKind.NUSHELL:
        return f"source {function_file}"
    return f". {function_file}"


def user_source_hint(shell: ShellKind, home: Path | str | None = None) -> str:
    """Command the user can run to load the startup file right away."""
    return f"source {startup_file(shell, resolve_home(home))}"


def _contains(path: Path, text: str) -> bool:
    try:
        return text in path.read_text(encoding="utf-8")
    except OSError:
        return False


def _ensure_exists(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.touch()


def install(
    shell: ShellKind,
    home: Path | str | None = None,
    config_dir: Path | str | None = None,
) -> InstallResult:
    """Install the wrapper and completion for ``shell``.

    Args:
        shell: Dialect to install for.
        home: Home directory (default: ``$HOME``).
        config_dir: Where to write the scripts (default: ``~/.config/cdw``).

    Raises:
        InstallError: On a missing HOME or any filesystem error.
    """
    home_path = resolve_home(home)
    target_dir = Path(config_dir) if config_dir else default_config_dir(home_path)

    wrapper = generate_wrapper(shell)
    completion = generate_completion(shell)
    function_file = target_dir / wrapper.path
    completion_file = target_dir / completion.path
    rc_file = startup_file(shell, home_path)
    line = source_line(shell, function_file, completion_file)

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        function_file.write_text(wrapper.content, encoding="utf-8")
        completion_file.write_text(completion.content, encoding="utf-8")
        logger.debug("Wrote %s and %s", function_file, completion_file)

        _ensure_exists(rc_file)

        appended = not _contains(rc_file, line)
        if appended:
            with rc_file.open("a", encoding="utf-8") as f:
                f.write(f"\n{SOURCE_MARKER}\n{line}\n")
            logger.info("Added source line to %s", rc_file)
        else:
            logger.info("Source line already present in %s", rc_file)
    except OSError as e:
        raise InstallError(f"Cannot install {shell} wrapper: {e}") from e

    return InstallResult(
        shell=shell,
        function_file=str(function_file),
        completion_file=str(completion_file),
        startup_file=str(rc_file),
        source_line=line,
        appended=appended,
    )
