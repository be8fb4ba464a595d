"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from cdw.core.services.shell_detect import ENV_MARKERS, POWERSHELL_MARKER_VAR


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temp dir and strip every variable cdw reads.

    Keeps the developer's real shell, config file and startup files
    out of every test.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("CDW_CONFIG", "CDW_LOG_LEVEL", "CDW_LOG_FILE", "CDW_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv(POWERSHELL_MARKER_VAR, raising=False)
    for var, _ in ENV_MARKERS:
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def home(isolated_env: Path) -> Path:
    """The temporary HOME directory."""
    return isolated_env


@pytest.fixture
def cdw_config_dir(home: Path) -> Path:
    """Return (and create) ~/.config/cdw inside the temporary HOME."""
    path = home / ".config" / "cdw"
    path.mkdir(parents=True)
    return path
