import io
import signal

import pytest

from rcshell.status import STATUS1, ShellStatus, status_message, strstatus


def quiet_status():
    status = ShellStatus()
    status.err = io.StringIO()
    return status


def test_fresh_status_is_true():
    status = quiet_status()
    assert status.istrue()
    assert status.sgetstatus() == [strstatus(0)]


def test_set_false_and_true():
    status = quiet_status()
    status.set(False)
    assert not status.istrue()
    assert status.sgetstatus() == [strstatus(STATUS1)]
    status.set(True)
    assert status.istrue()
    assert status.getstatus() == 0


def test_exit_status_word_matches_input():
    for code in (0, 3, 255):
        assert strstatus(code << 8) == str(code)


def test_signal_words():
    assert strstatus(signal.SIGKILL) == "sigkill"
    assert strstatus(signal.SIGKILL | 0x80) == "sigkill+core"


def test_pipeline_status_words_are_reversed():
    status = quiet_status()
    status.setpipestatus([0x100, 0])
    assert status.sgetstatus() == [strstatus(0), strstatus(0x100)]
    assert not status.istrue()
    assert status.getstatus() == int(not status.istrue())


def test_pipeline_all_zero_is_true():
    status = quiet_status()
    status.setpipestatus([0, 0, 0])
    assert status.istrue()
    assert len(status.sgetstatus()) == 3


@pytest.mark.parametrize(
    "words",
    [["3", "sigsegv", "0"], ["sigsegv+core"], ["0"], ["sigint", "sigterm"]],
)
def test_ssetstatus_round_trip(words):
    status = quiet_status()
    status.ssetstatus(words)
    assert status.sgetstatus() == words


def test_ssetstatus_arbitrary_word_is_false():
    status = quiet_status()
    status.ssetstatus(["foo"])
    assert not status.istrue()
    assert status.sgetstatus() == [strstatus(STATUS1)]


def test_signalled_status_getstatus_is_false():
    status = quiet_status()
    status.setstatus(signal.SIGTERM)
    assert not status.istrue()
    assert status.getstatus() == status.sgetstatus().count("sigterm")


def test_message_for_core_dump():
    assert status_message(signal.SIGSEGV | 0x80, -1) == "segmentation violation--core dumped"


def test_message_with_pid():
    assert status_message(5 << 8, 42) == "42: done (5)"


def test_sigint_is_not_reported():
    status = quiet_status()
    status.setstatus(signal.SIGINT)
    assert status.err.getvalue() == ""


def test_sigsegv_is_reported():
    status = quiet_status()
    status.setstatus(signal.SIGSEGV)
    assert "segmentation violation" in status.err.getvalue()


def test_exit_on_error():
    status = quiet_status()
    status.exit_on_error = True
    with pytest.raises(SystemExit) as exc:
        status.set(False)
    assert exc.value.code == status.getstatus()


def test_exit_on_error_suppressed_in_condition():
    status = quiet_status()
    status.exit_on_error = True
    status.cond = True
    status.set(False)
    assert not status.istrue()