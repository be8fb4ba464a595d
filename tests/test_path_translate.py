"""
Tests for path translation — drive paths, bare drives, pass-through.
"""

import string

import pytest

from cdw.core.services.path_translate import translate


class TestDrivePaths:
    def test_full_path(self):
        assert translate("D:\\Users\\x") == "/mnt/d/Users/x"

    def test_drive_letter_lowercased(self):
        assert translate("C:\\Windows") == "/mnt/c/Windows"
        assert translate("c:\\Windows") == "/mnt/c/Windows"

    def test_remainder_case_preserved(self):
        assert translate("E:\\Program Files\\App") == "/mnt/e/Program Files/App"

    def test_drive_root(self):
        assert translate("C:\\") == "/mnt/c/"

    def test_trailing_backslash(self):
        assert translate("C:\\Users\\") == "/mnt/c/Users/"

    def test_forward_slashes_in_remainder_kept(self):
        assert translate("C:\\a/b\\c") == "/mnt/c/a/b/c"

    @pytest.mark.parametrize("letter", list(string.ascii_letters))
    def test_every_letter(self, letter: str):
        suffix = "dir\\sub dir\\file.txt"
        expected = "/mnt/" + letter.lower() + "/" + suffix.replace("\\", "/")
        assert translate(letter + ":\\" + suffix) == expected


class TestBareDrive:
    def test_bare_drive(self):
        assert translate("C:") == "/mnt/c/"

    def test_bare_drive_lowercase(self):
        assert translate("z:") == "/mnt/z/"


class TestPassThrough:
    @pytest.mark.parametrize(
        "path",
        [
            "",
            "C",
            "/already/posix",
            "relative\\path",
            "\\\\server\\share\\dir",
            "C:/forward/slashes",
            "C:relative",
            "1:\\digits",
            "é:\\accent",
            "::\\x",
        ],
    )
    def test_unchanged(self, path: str):
        assert translate(path) == path

    @pytest.mark.parametrize("path", ["", "C", "/mnt/c/x", "~/docs", "C:/x", "\\\\srv\\s"])
    def test_idempotent_on_non_drive_input(self, path: str):
        assert translate(translate(path)) == translate(path)


class TestMountRoot:
    def test_custom_root(self):
        assert translate("C:\\x", mount_root="/win") == "/win/c/x"

    def test_trailing_slash_ignored(self):
        assert translate("C:\\x", mount_root="/win/") == "/win/c/x"

    def test_slash_root(self):
        assert translate("C:\\x", mount_root="/") == "/c/x"
        assert translate("C:", mount_root="/") == "/c/"
