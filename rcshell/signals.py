"""Signal names and messages, numbered the way the host system numbers them."""

from __future__ import annotations

import signal as _signal
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

# Ordered: where two names share a number, the first one listed wins.
_KNOWN = (
    ("SIGABRT", "sigabrt", "abort"),
    ("SIGALRM", "sigalrm", "alarm clock"),
    ("SIGBREAK", "sigbreak", "break"),
    ("SIGBUS", "sigbus", "bus error"),
    ("SIGCANCEL", "sigcancel", "thread cancellation"),
    ("SIGCHLD", "sigchld", "child stop or exit"),
    ("SIGCLD", "sigcld", "child stop or exit"),
    ("SIGCONT", "sigcont", "continue"),
    ("SIGDIL", "sigdil", "dil signal"),
    ("SIGEMT", "sigemt", "emt instruction"),
    ("SIGFPE", "sigfpe", "floating point error"),
    ("SIGFREEZE", "sigfreeze", "cpr freeze"),
    ("SIGHUP", "sighup", "hangup"),
    ("SIGILL", "sigill", "illegal instruction"),
    ("SIGINT", "sigint", "interrupt"),
    ("SIGIO", "sigio", "socket i/o possible"),
    ("SIGIOT", "sigiot", "iot instruction"),
    ("SIGKILL", "sigkill", "killed"),
    ("SIGLOST", "siglost", "resource lost"),
    ("SIGLWP", "siglwp", "thread library signal"),
    ("SIGPIPE", "sigpipe", "broken pipe"),
    ("SIGPOLL", "sigpoll", "pollable event occurred"),
    ("SIGPROF", "sigprof", "profiling timer alarm"),
    ("SIGPWR", "sigpwr", "power-fail restart"),
    ("SIGQUIT", "sigquit", "quit"),
    ("SIGSEGV", "sigsegv", "segmentation violation"),
    ("SIGSTKFLT", "sigstkflt", "stack fault"),
    ("SIGSTOP", "sigstop", "stopped by program"),
    ("SIGSYS", "sigsys", "invalid argument to system call"),
    ("SIGTERM", "sigterm", "terminated"),
    ("SIGTHAW", "sigthaw", "cpr thaw"),
    ("SIGTRAP", "sigtrap", "trace trap"),
    ("SIGTSTP", "sigtstp", "stopped"),
    ("SIGTTIN", "sigttin", "background tty read"),
    ("SIGTTOU", "sigttou", "background tty write"),
    ("SIGURG", "sigurg", "urgent condition on i/o channel"),
    ("SIGUSR1", "sigusr1", "user defined signal 1"),
    ("SIGUSR2", "sigusr2", "user defined signal 2"),
    ("SIGVTALRM", "sigvtalrm", "virtual timer alarm"),
    ("SIGWAITING", "sigwaiting", "lwps blocked"),
    ("SIGWINCH", "sigwinch", "window size change"),
    ("SIGWINDOW", "sigwindow", "window size change"),
    ("SIGXCPU", "sigxcpu", "exceeded cpu time limit"),
    ("SIGXFSZ", "sigxfsz", "exceeded file size limit"),
    ("SIGSAK", "sigsak", "secure attention key"),
    ("SIGSOUND", "sigsound", "hft sound sequence completed"),
    ("SIGRETRACT", "sigretract", "hft monitor mode retracted"),
    ("SIGKAP", "sigkap", "keep alive poll"),
    ("SIGGRANT", "siggrant", "hft monitor mode granted"),
    ("SIGALRM1", "sigalrm1", "m:n condition alarm"),
    ("SIGVIRT", "sigvirt", "virtual time alarm"),
    ("SIGPRE", "sigpre", "programming error"),
    ("SIGMIGRATE", "sigmigrate", "migrate process"),
    ("SIGDANGER", "sigdanger", "system crash imminent"),
    ("SIGMSG", "sigmsg", "hft input data pending"),
    ("SIGINFO", "siginfo", "information request"),
)


@dataclass(frozen=True)
class SignalInfo:
    """One signal: its number, its shell name and its message."""

    number: int
    name: str
    message: str


@lru_cache(maxsize=None)
def signal_table() -> tuple[SignalInfo, ...]:
    """Return the table of signals, indexed by signal number; entry 0 is empty."""
    known: dict[int, tuple[str, str]] = {}
    for attr, name, message in _KNOWN:
        number = getattr(_signal, attr, None)
        if number is None:
            continue
        number = int(number)
        if number > 0:
            known.setdefault(number, (name, message))

    maxsig = max([getattr(_signal, "NSIG", 1) - 1, *known])
    rtmin = getattr(_signal, "SIGRTMIN", None)
    rtmax = getattr(_signal, "SIGRTMAX", None)

    table = [SignalInfo(0, "", "")]
    for number in range(1, maxsig + 1):
        if number in known:
            name, message = known[number]
        elif rtmin is not None and rtmax is not None and int(rtmin) <= number <= int(rtmax):
            offset = number - int(rtmin)
            name, message = f"sigrt{offset}", f"real-time signal {offset}"
        else:
            name, message = f"sig{number}", f"unknown signal {number}"
        table.append(SignalInfo(number, name, message))
    return tuple(table)


def _entry(signo: int) -> Optional[SignalInfo]:
    table = signal_table()
    if 0 < signo < len(table):
        return table[signo]
    return None


def signal_name(signo: int) -> Optional[str]:
    """Return the shell name of a signal, or None if the number is unknown."""
    info = _entry(signo)
    return info.name if info is not None and info.name else None


def signal_message(signo: int) -> Optional[str]:
    """Return the message printed for a signal, or None if the number is unknown."""
    info = _entry(signo)
    return info.message if info is not None and info.message else None


def signal_number(name: str) -> int:
    """Return the number of the signal with the given shell name."""
    for info in signal_table()[1:]:
        if info.name == name:
            return info.number
    raise ValueError(f"unknown signal name: {name!r}")