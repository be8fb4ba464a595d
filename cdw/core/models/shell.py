"""
Shell model — the closed set of shell dialects cdw knows how to wrap.

Each dialect has one canonical display string (the enum value) and one
or more accepted parse aliases.  The alias table is the only place a
name is mapped to a kind, so ``ShellKind.parse(str(kind)) is kind``
holds for every member.

Per-dialect facts that the rest of the package needs (file extension,
startup file, availability probe) live in ``SHELL_PROFILES`` rather
than in conditionals scattered over the services.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class ShellKind(StrEnum):
    """Supported shell dialects.  The value is the display string."""

    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    POWERSHELL = "pwsh"
    NUSHELL = "nushell"
    XONSH = "xonsh"
    KSH = "ksh"
    SH = "sh"

    @classmethod
    def _missing_(cls, value: object) -> ShellKind | None:
        if isinstance(value, str):
            return SHELL_ALIASES.get(_normalize(value))
        return None

    @classmethod
    def parse(cls, name: str) -> ShellKind:
        """Parse a shell name or alias.

        Accepts the forms ``ps -o comm=`` reports for a shell process:
        ``-bash`` (login shell), ``/usr/bin/zsh``, ``pwsh.exe``.

        Raises:
            ValueError: If the name matches no known dialect.
        """
        kind = SHELL_ALIASES.get(_normalize(name))
        if kind is None:
            raise ValueError(f"Unknown shell: {name!r}")
        return kind

    @classmethod
    def try_parse(cls, name: str | None) -> ShellKind | None:
        """Like ``parse`` but returns None instead of raising."""
        if not name:
            return None
        return SHELL_ALIASES.get(_normalize(name))


# alias → kind.  Every display string must appear here.
SHELL_ALIASES: dict[str, ShellKind] = {
    "bash": ShellKind.BASH,
    "zsh": ShellKind.ZSH,
    "fish": ShellKind.FISH,
    "pwsh": ShellKind.POWERSHELL,
    "powershell": ShellKind.POWERSHELL,
    "nu": ShellKind.NUSHELL,
    "nushell": ShellKind.NUSHELL,
    "xonsh": ShellKind.XONSH,
    "ksh": ShellKind.KSH,
    "sh": ShellKind.SH,
}


def _normalize(name: str) -> str:
    name = name.strip().replace("\\", "/").rsplit("/", 1)[-1]
    name = name.lstrip("-").lower()
    if name.endswith(".exe"):
        name = name[: -len(".exe")]
    return name


class ShellProfile(BaseModel):
    """Static facts about one shell dialect.

    Attributes:
        extension:     Suffix for the installed wrapper/completion files.
        startup_file:  Startup file, relative to ``$HOME``.
        probe:         Command proving the shell is installed.
        probe_output:  If set, the probe must also print exactly this.
    """

    extension: str
    startup_file: str
    probe: list[str]
    probe_output: str | None = None


SHELL_PROFILES: dict[ShellKind, ShellProfile] = {
    ShellKind.BASH: ShellProfile(
        extension="bash", startup_file=".bashrc", probe=["bash", "--version"],
    ),
    ShellKind.ZSH: ShellProfile(
        extension="zsh", startup_file=".zshrc", probe=["zsh", "--version"],
    ),
    ShellKind.FISH: ShellProfile(
        extension="fish", startup_file=".config/fish/config.fish",
        probe=["fish", "--version"],
    ),
    ShellKind.POWERSHELL: ShellProfile(
        extension="ps1",
        startup_file=".config/powershell/Microsoft.PowerShell_profile.ps1",
        probe=["pwsh", "-Version"],
    ),
    ShellKind.NUSHELL: ShellProfile(
        extension="nu", startup_file=".config/nushell/config.nu",
        probe=["nu", "--version"],
    ),
    ShellKind.XONSH: ShellProfile(
        extension="xonsh", startup_file=".xonshrc", probe=["xonsh", "--version"],
    ),
    ShellKind.KSH: ShellProfile(
        extension="ksh", startup_file=".kshrc", probe=["ksh", "--version"],
    ),
    ShellKind.SH: ShellProfile(
        extension="sh", startup_file=".profile",
        probe=["sh", "-c", "echo 1"], probe_output="1",
    ),
}
