"""The shell's exit status: storage, conversion to words and status messages."""

from __future__ import annotations

import signal as _signal
import sys
from typing import Iterable, Optional, TextIO

from .signals import signal_message, signal_table
from .utils import a2u

STATUS0 = 0x000
STATUS1 = 0x100


def _signaled(value: int) -> bool:
    low = value & 0x7F
    return low != 0 and low != 0x7F


def _termsig(value: int) -> int:
    return value & 0x7F


def _exitstatus(value: int) -> int:
    return (value >> 8) & 0xFF


def _dumped(value: int) -> bool:
    return (value & 0x80) != 0


def strstatus(s: int) -> str:
    """Return a wait status as a word, e.g. ``0``, ``sigint`` or ``sigsegv+core``."""
    if _signaled(s):
        t = _termsig(s)
        core = "+core" if _dumped(s) else ""
        table = signal_table()
        if 0 < t < len(table) and table[t].name:
            return f"{table[t].name}{core}"
        return f"-{t}{core}"
    return str(_exitstatus(s))


def status_message(value: int, pid: Optional[int]) -> str:
    """Return the line describing how a process finished, prefixed by its pid if given."""
    t = _termsig(value) if _signaled(value) else 0
    core = "--core dumped" if t > 0 and _dumped(value) else ""
    prefix = f"{pid}: " if pid is not None and pid != -1 else ""
    if t == 0:
        return f"{prefix}done ({_exitstatus(value)})"
    message = signal_message(t)
    if message:
        return f"{prefix}{message}{core}"
    return f"{prefix}unknown signal {t}{core}"


class ShellStatus:
    """Exit statuses of the last command or pipeline."""

    def __init__(self) -> None:
        self._statuses: list[int] = [0]
        self._pipelength = 1
        self.interactive = False
        self.exit_on_error = False
        self.cond = False
        self.err: Optional[TextIO] = None

    def _store(self, values: list[int]) -> None:
        self._statuses = values + self._statuses[len(values):]
        self._pipelength = len(values)

    def istrue(self) -> bool:
        """True when every member of the pipeline exited with status zero."""
        return all(s == 0 for s in self._statuses[: self._pipelength])

    def getstatus(self) -> int:
        """Return the status as a small integer suitable for exit()."""
        if self._pipelength > 1:
            return int(not self.istrue())
        s = self._statuses[0]
        if _signaled(s):
            return 1
        return _exitstatus(s)

    def set(self, code: bool) -> None:
        """Set a true or false status."""
        self.setstatus(STATUS0 if code else STATUS1)

    def setpipestatus(self, stats: Iterable[int]) -> None:
        """Store the wait statuses of a whole pipeline."""
        values = list(stats)
        self._store(values)
        for value in values:
            self._statprint(-1, value)

    def setstatus(self, value: int) -> None:
        """Store the wait status of a single command."""
        self._store([value])
        self._statprint(-1, value)

    def sgetstatus(self) -> list[str]:
        """Return the status as the list of words that ``$status`` holds."""
        return [strstatus(s) for s in reversed(self._statuses[: self._pipelength])]

    def ssetstatus(self, words: Iterable[str]) -> None:
        """Set the status from a list of words as ``$status`` holds them."""
        words = list(words)
        table = signal_table()
        values: list[int] = []
        for word in words:
            number = a2u(word)
            if number is not None:
                values.append(number << 8)
                continue
            for info in table:
                if info.name == word:
                    values.append(info.number)
                    break
                if word == info.name + "+core":
                    values.append(info.number + 0x80)
                    break
            else:
                # arbitrary strings are accepted as a false status
                values.append(1 << 8)
        values.reverse()
        self._store(values)

    def _statprint(self, pid: int, value: int) -> None:
        t = _termsig(value) if _signaled(value) else 0
        dumped = t > 0 and _dumped(value)
        if (self.interactive and pid != -1) or (
            t > 0 and (dumped or t not in (_signal.SIGINT, _signal.SIGPIPE))
        ):
            stream = self.err if self.err is not None else sys.stderr
            stream.write(status_message(value, pid) + "\n")
        if value != 0 and self.exit_on_error and not self.cond:
            raise SystemExit(self.getstatus())