import io

import pytest

from rcshell.history import command_candidates, edit, isin, main, parse_name, sub


def run_edit(line, keys):
    err = io.StringIO()
    return edit(line, io.StringIO(keys), ":", err), err.getvalue()


def test_isin():
    assert isin("hello world", "world") == 6
    assert isin("hello", "xyz") is None
    assert isin("abc", "") == 0


def test_sub_first_only():
    assert sub("a-b-c", "-", "+") == "a+b-c"
    assert sub("abc", "x", "y") == "abc"


def test_parse_name():
    assert parse_name("/usr/bin/-") == ("-", False, False)
    assert parse_name("--p") == ("-", True, True)
    assert parse_name(":p") == (":", False, True)
    with pytest.raises(ValueError):
        parse_name("dir/")


def test_candidates_newest_first():
    assert list(command_candidates("a\nb\n", "-")) == ["b", "a"]
    assert list(command_candidates("", "-")) == []


def test_candidates_skip_history_commands():
    text = "ls -l\n- foo\necho | -\nx\n"
    assert list(command_candidates(text, "-")) == ["x", "ls -l"]


def test_edit_accept_unchanged():
    result, shown = run_edit("abc", "\n")
    assert result == "abc"
    assert shown == "abc\n"


def test_edit_reject():
    result, _ = run_edit("abc", ":\n")
    assert result is None


def test_edit_delete_and_replace():
    assert run_edit("abc", "#\n\n")[0] == "abc"[1:]
    assert run_edit("abc", "%\n\n")[0] == " " + "abc"[1:]


def test_edit_insert_and_append():
    assert run_edit("abc", "^xy\n\n")[0] == "xy" + "abc"
    assert run_edit("abc", "+zz\n\n")[0] == "abc" + "zz"


def test_edit_truncate():
    assert run_edit("abc", " $\n\n")[0] == "abc"[:1]


def test_edit_eof_raises():
    with pytest.raises(EOFError):
        run_edit("abc", "x")


def test_main_prints_and_records(tmp_path, monkeypatch, capsys):
    hist = tmp_path / "hist"
    hist.write_text("echo foo\nls\n")
    monkeypatch.setenv("history", str(hist))
    assert main(["-p", "foo"]) == 0
    assert capsys.readouterr().out == "echo foo\n"
    assert hist.read_text() == "echo foo\nls\necho foo\n"


def test_main_substitutes(tmp_path, monkeypatch, capsys):
    hist = tmp_path / "hist"
    hist.write_text("echo foo\n")
    monkeypatch.setenv("history", str(hist))
    assert main(["-p", "foo:bar"]) == 0
    assert capsys.readouterr().out == "echo bar\n"


def test_main_not_matched(tmp_path, monkeypatch, capsys):
    hist = tmp_path / "hist"
    hist.write_text("ls\n")
    monkeypatch.setenv("history", str(hist))
    assert main(["-p", "nothing"]) == 1
    assert "command not matched" in capsys.readouterr().err
    assert hist.read_text() == "ls\n"


def test_main_without_history(monkeypatch, capsys):
    monkeypatch.delenv("history", raising=False)
    assert main(["-p"]) == 1
    assert "$history not set" in capsys.readouterr().err