"""Matching of a single word against a single pattern."""

from __future__ import annotations

from typing import Optional, Sequence


def _at(text: str, index: int) -> str:
    return text[index] if index < len(text) else "\0"


def _rangematch(pattern: str, start: int, c: str) -> int:
    """Match c against the class starting at ``start``.

    Returns the offset just past the closing bracket, 0 if the class is
    unterminated and c is ``[``, or -1 on failure.
    """
    i = start
    neg = _at(pattern, i) == "~"
    matched = False
    if neg:
        i += 1
    if _at(pattern, i) == "]":
        i += 1
        matched = c == "]"
    while _at(pattern, i) != "]":
        if _at(pattern, i) == "\0":
            return 0 if c == "[" else -1
        if _at(pattern, i + 1) == "-" and _at(pattern, i + 2) != "]":
            if c >= _at(pattern, i):
                matched = matched or c <= _at(pattern, i + 2)
            i += 3
        else:
            matched = matched or _at(pattern, i) == c
            i += 1
    if matched != neg:
        return i - start + 1
    return -1


def match(pattern: str, meta: Optional[Sequence], subject: str) -> bool:
    """Match ``subject`` against ``pattern``.

    ``meta`` flags, position by position, which characters of the pattern
    are live metacharacters; with no flags the pattern is a plain string.
    """
    if meta is None:
        return pattern == subject
    plen, slen = len(pattern), len(subject)
    pi = si = 0
    star_p = 0
    star_s: Optional[int] = None
    while pi < plen or si < slen:
        if pi < plen:
            pc = pattern[pi]
            if not meta[pi]:
                if si < slen and subject[si] == pc:
                    pi += 1
                    si += 1
                    continue
            elif pc == "?":
                if si < slen:
                    pi += 1
                    si += 1
                    continue
            elif pc == "[":
                if si < slen:
                    r = 1 + _rangematch(pattern, pi + 1, subject[si])
                    if r > 0:
                        pi += r
                        si += 1
                        continue
            elif pc == "*":
                star_p = pi
                pi += 1
                star_s = si + 1 if si < slen else None
                continue
            else:
                raise ValueError("bad metacharacter in match")
        if star_s is not None:
            pi, si = star_p, star_s
            continue
        return False
    return True