"""The ``-`` / ``--`` history commands: find, substitute, edit and rerun a command."""

from __future__ import annotations

import os
import sys
from typing import Iterator, Optional, TextIO

_SKIP_AFTER = "`@(){|/"


def isin(target: str, pattern: str) -> Optional[int]:
    """Return the index of the first occurrence of ``pattern``, or None."""
    index = target.find(pattern)
    return index if index >= 0 else None


def sub(s: str, old: str, new: str) -> str:
    """Replace the first occurrence of ``old`` with ``new``."""
    index = isin(s, old)
    if index is None:
        return s
    return s[:index] + new + s[index + len(old):]


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def parse_name(progname: str) -> tuple[str, bool, bool]:
    """Split a program name into (marker character, edit flag, print flag)."""
    name = _basename(progname)
    if not name:
        raise ValueError("empty program name")
    me = name[0]
    rest = name[1:]
    editit = rest.startswith(me)
    if editit:
        rest = rest[1:]
    printit = rest.startswith("p")
    return me, editit, printit


def _refers_to_history(line: str, me: str) -> bool:
    for index, ch in enumerate(line):
        if ch != me:
            continue
        before = line[:index].rstrip(" \t")
        if not before or before[-1] in _SKIP_AFTER:
            return True
    return False


def command_candidates(text: str, me: str) -> Iterator[str]:
    """Yield the commands of a history file, newest first.

    Lines that themselves run a history command (the marker character at
    the start of a command) are skipped.
    """
    if not text:
        return
    for line in reversed(text[:-1].split("\n")):
        if not _refers_to_history(line, me):
            yield line


class _Reader:
    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pushed: list[str] = []

    def getc(self) -> str:
        if self._pushed:
            return self._pushed.pop()
        return self._stream.read(1)

    def ungetc(self, c: str) -> None:
        if c:
            self._pushed.append(c)


def edit(line: str, stream: TextIO, me: str, err: TextIO) -> Optional[str]:
    """Edit a command interactively, reading edit lines from ``stream``.

    Each edit line is applied column by column under the command shown on
    ``err``; an empty line accepts the command, and a line holding only the
    marker character rejects it (None is returned).
    """
    reader = _Reader(stream)
    s = line
    while True:
        err.write(s + "\n")
        out: list[str] = []
        pos, end, col, ins = 0, len(s), -1, False
        while True:
            col += 1
            c = reader.getc()
            if c == me and col == 0:
                peek = reader.getc()
                if peek == "\n":
                    return None
                reader.ungetc(peek)
            if c == "\n":
                if col == 0:
                    return s
                out.extend(s[pos:end])
                s = "".join(out)
                break
            if not c:
                raise EOFError("end of input while editing")
            if ins or pos >= end:
                out.append(c)
                continue
            if c == "+":
                out.extend(s[pos:end])
                pos = end
                continue
            if c == "$":
                end = pos
                continue
            if c == "^":
                ins = True
                continue
            if c == "\t":
                while True:
                    if pos < end:
                        ch = s[pos]
                        pos += 1
                    else:
                        ch = "\t"
                    out.append(ch)
                    if ch == "\t":
                        col |= 7
                    if col & 7 == 7:
                        break
                    col += 1
                continue
            if c == " ":
                if s[pos] == "\t":
                    oldcol = col
                    while True:
                        if col & 7 == 7:
                            out.append("\t")
                            break
                        peek = reader.getc()
                        if peek != " ":
                            reader.ungetc(peek)
                            if peek != "\n":
                                while True:
                                    out.append(" ")
                                    oldcol += 1
                                    if oldcol > col:
                                        break
                            break
                        col += 1
                else:
                    out.append(s[pos])
            elif c != "#":
                out.append(" " if c == "%" else c)
            if pos < end and (s[pos] != "\t" or col & 7 == 7):
                pos += 1


def _parse_args(args: list[str]) -> tuple[list[str], list[tuple[str, str, int]]]:
    searches: list[str] = []
    replaces: list[tuple[str, str, int]] = []
    for arg in args:
        old, colon, rest = arg.partition(":")
        if not colon:
            searches.append(arg)
            continue
        new = rest.lstrip(":")
        replaces.append((old, new, len(rest) - len(new)))
    return searches, replaces


def main(argv: Optional[list[str]] = None) -> int:
    """Find a command in ``$history``, adjust it, record it and run or print it."""
    if argv is None:
        argv = sys.argv
    me, editit, printit = parse_name(argv[0] if argv else "-")
    searches, replaces = _parse_args(list(argv[1:]))

    history = os.environ.get("history")
    if history is None:
        sys.stderr.write("$history not set\n")
        return 1
    try:
        histfile = open(history, "r+", encoding="utf-8", errors="surrogateescape", newline="")
    except OSError as exc:
        sys.stderr.write(f"{history}: {exc.strerror}\n")
        return 1

    with histfile:
        chosen: Optional[str] = None
        for command in command_candidates(histfile.read(), me):
            if not all(isin(command, s) is not None for s in searches):
                continue
            matched = True
            for old, new, reps in replaces:
                if isin(command, old) is None:
                    matched = False
                    break
                for _ in range(reps + 1):
                    command = sub(command, old, new)
            if not matched:
                continue
            if editit:
                try:
                    command = edit(command, sys.stdin, me, sys.stderr)
                except EOFError:
                    return 1
                if command is None:
                    continue
            chosen = command
            break
        if chosen is None:
            sys.stderr.write("command not matched\n")
            return 1
        histfile.seek(0, os.SEEK_END)
        histfile.write(chosen + "\n")

    if printit:
        sys.stdout.write(chosen + "\n")
        return 0
    if not editit:
        sys.stderr.write(chosen + "\n")
    shell = os.environ.get("SHELL") or "/bin/sh"
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execl(shell, _basename(shell), "-c", chosen)
    except OSError as exc:
        sys.stderr.write(f"{shell}: {exc.strerror}\n")
    return 1