import signal

import pytest

from rcshell.signals import (
    SignalInfo,
    signal_message,
    signal_name,
    signal_number,
    signal_table,
)


def test_entry_zero_is_empty():
    assert signal_table()[0] == SignalInfo(0, "", "")


def test_table_is_indexed_by_number():
    table = signal_table()
    assert all(info.number == index for index, info in enumerate(table))
    assert len(table) >= signal.NSIG


def test_names_start_with_sig():
    assert all(info.name.startswith("sig") for info in signal_table()[1:])


@pytest.mark.parametrize(
    "signo, name, message",
    [
        (signal.SIGINT, "sigint", "interrupt"),
        (signal.SIGTERM, "sigterm", "terminated"),
        (signal.SIGKILL, "sigkill", "killed"),
        (signal.SIGSEGV, "sigsegv", "segmentation violation"),
        (signal.SIGPIPE, "sigpipe", "broken pipe"),
    ],
)
def test_known_signals(signo, name, message):
    assert signal_name(signo) == name
    assert signal_message(signo) == message


def test_first_listed_alias_wins():
    assert signal_name(signal.SIGABRT) == "sigabrt"
    assert signal_name(signal.SIGCHLD) == "sigchld"


def test_number_round_trip():
    for info in signal_table()[1:]:
        assert signal_number(info.name) == info.number


def test_out_of_range_is_unknown():
    assert signal_name(len(signal_table())) is None
    assert signal_message(-1) is None
    assert signal_name(0) is None


def test_unknown_name_raises():
    with pytest.raises(ValueError):
        signal_number("sigbogus")