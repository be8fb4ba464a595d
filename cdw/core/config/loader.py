"""
Configuration loader — reads the optional cdw config.yml.

The file is optional: without one, every setting has a default and cdw
behaves exactly like an unconfigured install.  Lookup order:

    $CDW_CONFIG  →  $HOME/.config/cdw/config.yml

Example::

    mount_root: /mnt          # where WSL mounts the Windows drives
    default_shell: zsh        # used by --init / --init-display instead of detection
    config_dir: ~/.config/cdw # where wrapper scripts are written
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from cdw.core.models.shell import ShellKind
from cdw.core.services.path_translate import DEFAULT_MOUNT_ROOT

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.yml"
CONFIG_ENV_VAR = "CDW_CONFIG"


class ConfigError(Exception):
    """Raised when the cdw configuration is invalid or unreadable."""


class CdwConfig(BaseModel):
    """User settings.  All fields are optional."""

    mount_root: str = DEFAULT_MOUNT_ROOT
    default_shell: ShellKind | None = None
    config_dir: str | None = None

    @field_validator("mount_root")
    @classmethod
    def _absolute_mount_root(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"mount_root must be an absolute path, got {value!r}")
        return value

    @field_validator("default_shell", mode="before")
    @classmethod
    def _parse_shell_alias(cls, value: object) -> object:
        if isinstance(value, str):
            return ShellKind.parse(value)
        return value

    @field_validator("config_dir")
    @classmethod
    def _expand_config_dir(cls, value: str | None) -> str | None:
        return os.path.expanduser(value) if value else value


def find_config_file() -> Path | None:
    """Return the config file to load, or None if there is none.

    ``$CDW_CONFIG`` is returned even if it does not exist, so that a
    mistyped path is reported instead of silently ignored.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()

    home = os.environ.get("HOME")
    if not home:
        return None

    candidate = Path(home) / ".config" / "cdw" / CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_config(path: Path | None = None) -> CdwConfig:
    """Load and validate the cdw configuration.

    Args:
        path: Explicit config path.  If None, uses ``find_config_file()``
            and falls back to defaults when nothing is found.

    Raises:
        ConfigError: If the file is missing (explicit path only),
            unreadable, or invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No cdw config file, using defaults")
            return CdwConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading cdw config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return CdwConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return CdwConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid cdw configuration: {e}") from e
