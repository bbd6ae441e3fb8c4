import errno
import os

import pytest

from rcshell.which import CommandFinder, join, protect, rc_access


def _make(directory, name, mode):
    target = directory / name
    target.write_text("#!/bin/sh\nexit 0\n")
    target.chmod(mode)
    return target


def test_join_empty_directory_gives_command():
    assert join("", "ls") == "ls"


def test_join_adds_single_slash():
    assert join("/bin", "ls") == "/bin/ls"
    assert join("/bin/", "ls") == "/bin/ls"


def test_protect_replaces_nonprinting():
    assert protect("a\tb\x01c") == "a?b?c"
    assert protect("plain text") == "plain text"


def test_rc_access_executable_file(tmp_path):
    prog = _make(tmp_path, "prog", 0o755)
    assert rc_access(str(prog), False) is True


def test_rc_access_rejects_unexecutable_file(tmp_path):
    data = _make(tmp_path, "data", 0o644)
    assert rc_access(str(data), False) is False


def test_rc_access_rejects_directory(tmp_path):
    assert rc_access(str(tmp_path), False) is False


def test_rc_access_verbose_reports_missing(tmp_path, capsys):
    missing = str(tmp_path / "missing")
    assert rc_access(missing, True) is False
    err = capsys.readouterr().err
    assert err == f"rc: {missing}: {os.strerror(errno.ENOENT)}\n"


def test_rc_access_verbose_reports_permission(tmp_path, capsys):
    data = _make(tmp_path, "data", 0o644)
    assert rc_access(str(data), True) is False
    err = capsys.readouterr().err
    assert err == f"rc: {data}: {os.strerror(errno.EACCES)}\n"


def test_which_searches_path_in_order(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    _make(first, "tool", 0o644)
    _make(second, "tool", 0o755)
    finder = CommandFinder([str(first), str(second)])
    assert finder.which("tool") == join(str(second), "tool")


def test_which_none_name():
    assert CommandFinder([]).which(None) is None


def test_which_absolute_path(tmp_path):
    prog = _make(tmp_path, "prog", 0o755)
    finder = CommandFinder([])
    assert finder.which(str(prog)) == str(prog)
    assert finder.which(str(tmp_path / "nothing")) is None


def test_which_verbose_not_found(tmp_path, capsys):
    finder = CommandFinder([str(tmp_path)])
    assert finder.which("nope", True) is None
    assert capsys.readouterr().err == "rc: cannot find `nope'\n"


def test_which_uses_cache_until_verified(tmp_path):
    prog = _make(tmp_path, "prog", 0o755)
    finder = CommandFinder([str(tmp_path)])
    full = finder.which("prog")
    assert full == join(str(tmp_path), "prog")
    prog.unlink()
    assert finder.which("prog") == full
    finder.verify(full)
    assert finder.which("prog") is None


def test_verify_keeps_valid_entry(tmp_path):
    _make(tmp_path, "prog", 0o755)
    finder = CommandFinder([str(tmp_path)])
    full = finder.which("prog")
    finder.verify(full)
    assert finder.which("prog") == full


def test_setting_path_clears_cache(tmp_path):
    _make(tmp_path, "prog", 0o755)
    finder = CommandFinder([str(tmp_path)])
    assert finder.which("prog") is not None
    finder.path = []
    assert finder.path == []
    assert finder.which("prog") is None


@pytest.mark.parametrize("name", ["./prog", "../prog"])
def test_relative_absolute_names_skip_path(tmp_path, name):
    finder = CommandFinder([str(tmp_path)])
    _make(tmp_path, "prog", 0o755)
    assert finder.which(name) is None