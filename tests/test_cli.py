"""
Tests for the CLI — signal output, help, init modes, error exits.

Detection and availability probes are patched so no real ``ps`` or
shells are spawned.
"""

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from cdw.core.models.shell import ShellKind
from cdw.core.services.generators.wrapper import wrapper_source
from cdw.main import cli


class TestCLIGlobal:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Change directory to a Windows path in WSL" in result.output
        assert "--init-display" in result.output

    def test_no_arguments_prints_help_and_fails(self):
        runner = CliRunner()
        result = runner.invoke(cli, [])
        assert result.exit_code == 1
        assert "Usage:" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestSignalOutput:
    def test_cd_signal(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["D:\\Users\\x"])
        assert result.exit_code == 0
        assert result.output == "\x07/mnt/d/Users/x\n"

    def test_first_byte_is_bel(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["C:"])
        assert result.stdout_bytes[0] == 7
        assert result.stdout_bytes[1:] == b"/mnt/c/\n"

    def test_convert(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--convert", "C:\\Users\\me"])
        assert result.exit_code == 0
        assert result.output == "/mnt/c/Users/me\n"

    def test_convert_short_flag(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", "/already/posix"])
        assert result.output == "/already/posix\n"

    def test_verbose_lines_after_signal(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["-v", "C:\\a\\b"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "\x07/mnt/c/a/b",
            "Windows path: C:\\a\\b",
            "WSL path: /mnt/c/a/b",
        ]

    def test_verbose_convert(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["-v", "-c", "E:"])
        assert result.output.splitlines()[0] == "/mnt/e/"

    def test_mount_root_from_config(self, cdw_config_dir: Path):
        (cdw_config_dir / "config.yml").write_text("mount_root: /\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", "C:\\x"])
        assert result.output == "/c/x\n"

    def test_bad_config_still_signals(self, cdw_config_dir: Path):
        (cdw_config_dir / "config.yml").write_text("mount_root: relative\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["C:\\x"])
        assert result.exit_code == 0
        assert result.output.endswith("\x07/mnt/c/x\n")
        assert "using defaults" in result.output

    def test_bad_config_convert_uses_default_mount(self, cdw_config_dir: Path):
        (cdw_config_dir / "config.yml").write_text("- not a mapping\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", "D:\\data"])
        assert result.exit_code == 0
        assert result.output.endswith("/mnt/d/data\n")


class TestInitDisplay:
    def test_named_shell(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--init-display", "fish"])
        assert result.exit_code == 0
        assert result.output == wrapper_source(ShellKind.FISH) + "\n"

    def test_equals_form_with_alias(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--init-display=powershell"])
        assert result.output == wrapper_source(ShellKind.POWERSHELL) + "\n"

    def test_detected_shell(self):
        runner = CliRunner()
        with patch("cdw.core.services.dispatch.detect", return_value=ShellKind.XONSH):
            result = runner.invoke(cli, ["--init-display"])
        assert result.exit_code == 0
        assert "def cdw(args):" in result.output

    def test_config_default_shell(self, cdw_config_dir: Path):
        (cdw_config_dir / "config.yml").write_text("default_shell: nu\n")
        runner = CliRunner()
        with patch("cdw.core.services.dispatch.detect") as detect:
            result = runner.invoke(cli, ["--init-display"])
            detect.assert_not_called()
        assert "def --wrapped --env cdw" in result.output

    def test_unsupported_shell(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--init-display", "tcsh"])
        assert result.exit_code == 0
        assert "# Unsupported shell" in result.output

    def test_bad_config_aborts(self, cdw_config_dir: Path):
        (cdw_config_dir / "config.yml").write_text("- not a mapping\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--init-display", "bash"])
        assert result.exit_code == 1
        assert "Expected a YAML mapping" in result.output


class TestInit:
    def test_init_detected_shell(self, home: Path):
        runner = CliRunner()
        with patch("cdw.core.services.dispatch.detect", return_value=ShellKind.ZSH):
            result = runner.invoke(cli, ["--init"])
        assert result.exit_code == 0
        assert "Function added to your zsh configuration." in result.output
        assert f"Run `source {home}/.zshrc` in your terminal" in result.output
        assert (home / ".config" / "cdw" / "function.zsh").is_file()

    def test_init_twice_is_idempotent(self, home: Path):
        runner = CliRunner()
        with patch("cdw.core.services.dispatch.detect", return_value=ShellKind.BASH):
            runner.invoke(cli, ["-i"])
            runner.invoke(cli, ["-i"])
        assert (home / ".bashrc").read_text().count("# Added by cdw") == 1

    def test_init_beats_path(self, home: Path):
        runner = CliRunner()
        with patch("cdw.core.services.dispatch.detect", return_value=ShellKind.SH):
            result = runner.invoke(cli, ["--init", "C:\\x"])
        assert "\x07" not in result.output
        assert (home / ".profile").is_file()

    def test_init_without_home(self, monkeypatch):
        monkeypatch.delenv("HOME")
        runner = CliRunner()
        with patch("cdw.core.services.dispatch.detect", return_value=ShellKind.BASH):
            result = runner.invoke(cli, ["--init"])
        assert result.exit_code == 1
        assert "HOME not set" in result.output


class TestInitAll:
    def test_installs_every_available_shell(self, home: Path):
        runner = CliRunner()
        with patch("cdw.main.enumerate_available",
                   return_value={ShellKind.FISH, ShellKind.BASH}):
            result = runner.invoke(cli, ["--init-all"])
        assert result.exit_code == 0
        assert "In bash shell, Run" in result.output
        assert "In fish shell, Run" in result.output
        # installed in enum order
        assert result.output.index("bash") < result.output.index("fish")
        assert (home / ".bashrc").is_file()
        assert (home / ".config" / "fish" / "config.fish").is_file()
        assert not (home / ".zshrc").exists()

    def test_nothing_available(self, home: Path):
        runner = CliRunner()
        with patch("cdw.main.enumerate_available", return_value=set()):
            result = runner.invoke(cli, ["--init-all"])
        assert result.exit_code == 0
        assert "No supported shells found" in result.output
