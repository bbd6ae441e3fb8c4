"""Small helpers: number parsing, path tests, word lists and opening files."""

from __future__ import annotations

import enum
import os
from typing import Iterable, Optional


class RcError(Exception):
    """An error that aborts the current command."""


class RedirType(enum.IntEnum):
    """Kinds of redirection."""

    FROM = 0
    CREATE = 1
    APPEND = 2
    HEREDOC = 3
    HERESTRING = 4


_MODE_FLAGS = {
    RedirType.FROM: os.O_RDONLY,
    RedirType.CREATE: os.O_TRUNC | os.O_CREAT | os.O_WRONLY,
    RedirType.APPEND: os.O_APPEND | os.O_CREAT | os.O_WRONLY,
}


def n2u(s: str, base: int) -> Optional[int]:
    """Parse an unsigned number in ``base``; None if it is not one."""
    value = 0
    for ch in s:
        digit = ord(ch) - ord("0")
        if not 0 <= digit < base:
            return None
        value = (value * base + digit) & 0xFFFFFFFF
    if value >= 0x80000000:
        return None
    return value


def a2u(s: str) -> Optional[int]:
    """Parse an unsigned decimal number; None if it is not one."""
    return n2u(s, 10)


def isabsolute(path: str) -> bool:
    """True if the path begins with ``/``, ``./`` or ``../``."""
    return path.startswith(("/", "./", "../"))


def listlen(words: Iterable[str]) -> int:
    """Space needed to hold the words, each followed by a separator."""
    return sum(len(word) + 1 for word in words)


def rc_open(name: str, mode: RedirType) -> int:
    """Open a file for a redirection of the given kind and return its descriptor."""
    try:
        flags = _MODE_FLAGS[RedirType(mode)]
    except (KeyError, ValueError):
        raise ValueError("bad mode passed to rc_open") from None
    return os.open(name, flags, 0o666)