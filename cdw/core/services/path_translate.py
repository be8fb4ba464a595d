"""
Path translation — Windows drive paths to their WSL mount equivalents.

    C:\\Users\\me   →  /mnt/c/Users/me
    D:             →  /mnt/d/
    /home/me       →  /home/me        (unchanged)

Anything that is not a drive-rooted Windows path passes through
untouched: POSIX paths, UNC paths, relative paths and ``C:/forward``.
"""

from __future__ import annotations

DEFAULT_MOUNT_ROOT = "/mnt"


def _drive_letter(path: str) -> str | None:
    """Return the lowercased drive letter if ``path`` starts with ``X:``."""
    if len(path) < 2 or path[1] != ":":
        return None
    letter = path[0]
    if not (letter.isascii() and letter.isalpha()):
        return None
    return letter.lower()


def translate(path: str, mount_root: str = DEFAULT_MOUNT_ROOT) -> str:
    """Translate a Windows path into the WSL filesystem.

    Never fails: input that cannot be read as ``X:\\...`` or a bare
    ``X:`` is returned unchanged.

    Args:
        path: The Windows path as typed by the user.
        mount_root: Where WSL mounts the Windows drives.  A trailing
            slash is ignored, so ``"/"`` yields ``/c/...``.
    """
    drive = _drive_letter(path)
    if drive is None:
        return path

    root = mount_root.rstrip("/")

    if len(path) > 2 and path[2] == "\\":
        remainder = path[3:].replace("\\", "/")
        return f"{root}/{drive}/{remainder}"

    if len(path) == 2:
        return f"{root}/{drive}/"

    return path
