"""printf-style formatting with an extensible table of conversions."""

from __future__ import annotations

import enum
from typing import Any, Callable, Iterable, Optional, Union

_TABLE_SIZE = 256
_ULONG_MASK = (1 << 64) - 1
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class FmtFlag(enum.IntFlag):
    """Flags gathered while reading one conversion specification."""

    NONE = 0
    UNSIGNED = 1
    LONG = 2
    ALTFORM = 4
    LEFTSIDE = 8
    ZEROPAD = 16
    F1SET = 32
    F2SET = 64


class FormatError(ValueError):
    """A format string named a conversion character with no conversion."""

    def __init__(self, char: str) -> None:
        self.char = char
        shown = "end of format" if char == "\0" else repr(char)
        super().__init__(f"bad conversion character {shown} in printfmt")


class _State:
    """Formatting state handed to every conversion function."""

    def __init__(self, args: Iterable[Any]) -> None:
        self._args = iter(args)
        self._out: list[str] = []
        self.reset()

    def reset(self) -> None:
        self.flags = FmtFlag.NONE
        self.f1 = 0
        self.f2 = 0

    def next_arg(self) -> Any:
        try:
            return next(self._args)
        except StopIteration:
            raise ValueError("too few arguments for format") from None

    def put(self, text: str) -> None:
        self._out.append(text)

    def text(self) -> str:
        return "".join(self._out)


Conv = Callable[[_State, str], bool]


def _flag(flag: FmtFlag) -> Conv:
    def conv(state: _State, c: str) -> bool:
        state.flags |= flag
        return True

    return conv


def _digitconv(state: _State, c: str) -> bool:
    if state.flags & FmtFlag.F2SET:
        state.f2 = 10 * state.f2 + ord(c) - ord("0")
    else:
        state.flags |= FmtFlag.F1SET
        state.f1 = 10 * state.f1 + ord(c) - ord("0")
    return True


def _zeroconv(state: _State, c: str) -> bool:
    if state.flags & (FmtFlag.F1SET | FmtFlag.F2SET):
        return _digitconv(state, "0")
    state.flags |= FmtFlag.ZEROPAD
    return True


def _sconv(state: _State, c: str) -> bool:
    s = str(state.next_arg())
    if not state.flags & FmtFlag.F1SET:
        state.put(s)
        return False
    padding = " " * max(state.f1 - len(s), 0)
    if state.flags & FmtFlag.LEFTSIDE:
        state.put(s + padding)
    else:
        state.put(padding + s)
    return False


def _to_base(u: int, radix: int) -> str:
    digits = []
    while True:
        u, rem = divmod(u, radix)
        digits.append(_DIGITS[rem])
        if u == 0:
            break
    return "".join(reversed(digits))


def _intconv(state: _State, radix: int, altform: str) -> None:
    n = int(state.next_arg())
    flags = state.flags
    if flags & FmtFlag.UNSIGNED or n >= 0:
        prefix = ""
        u = n & _ULONG_MASK
    else:
        prefix = "-"
        u = -n
    if flags & FmtFlag.ALTFORM:
        prefix += altform

    number = _to_base(u, radix)
    zeroes = 0
    if flags & FmtFlag.F2SET and state.f2 > len(number):
        zeroes = state.f2 - len(number)
    width = len(prefix) + zeroes + len(number)
    padding = 0
    if flags & FmtFlag.F1SET and state.f1 > width:
        padding = state.f1 - width

    padchar = " "
    if padding > 0 and flags & FmtFlag.ZEROPAD:
        padchar = "0"
        if not flags & FmtFlag.LEFTSIDE:
            zeroes += padding
            padding = 0

    body = prefix + "0" * zeroes + number
    if flags & FmtFlag.LEFTSIDE:
        state.put(body + padchar * padding)
    else:
        state.put(padchar * padding + body)


def _cconv(state: _State, c: str) -> bool:
    value = state.next_arg()
    state.put(chr(value) if isinstance(value, int) else str(value))
    return False


def _dconv(state: _State, c: str) -> bool:
    _intconv(state, 10, "")
    return False


def _oconv(state: _State, c: str) -> bool:
    _intconv(state, 8, "0")
    return False


def _xconv(state: _State, c: str) -> bool:
    _intconv(state, 16, "0x")
    return False


def _pctconv(state: _State, c: str) -> bool:
    state.put("%")
    return False


def _badconv(state: _State, c: str) -> bool:
    error = FormatError(c)
    state.reset()
    raise error


def _key(char: Union[str, int]) -> int:
    code = ord(char) if isinstance(char, str) else int(char)
    return code & (_TABLE_SIZE - 1)


class Format:
    """A table of conversions and the driver that applies it to a format string."""

    def __init__(self) -> None:
        self._table: list[Conv] = [_badconv] * _TABLE_SIZE
        defaults: dict[str, Conv] = {
            "s": _sconv,
            "c": _cconv,
            "d": _dconv,
            "o": _oconv,
            "x": _xconv,
            "%": _pctconv,
            "u": _flag(FmtFlag.UNSIGNED),
            "l": _flag(FmtFlag.LONG),
            "#": _flag(FmtFlag.ALTFORM),
            "-": _flag(FmtFlag.LEFTSIDE),
            ".": _flag(FmtFlag.F2SET),
            "0": _zeroconv,
        }
        defaults.update({str(d): _digitconv for d in range(1, 10)})
        for char, conv in defaults.items():
            self._table[_key(char)] = conv

    def install(self, char: Union[str, int], conv: Optional[Conv]) -> Conv:
        """Install a conversion for ``char`` and return the one it replaces.

        A conversion is called with the formatting state and the character;
        it returns True when it only changed flags and the specification
        goes on, False when it produced output.  With ``conv`` None the
        table is left unchanged.
        """
        key = _key(char)
        old = self._table[key]
        if conv is not None:
            self._table[key] = conv
        return old

    def format(self, fmt: str, *args: Any) -> str:
        """Format the arguments according to ``fmt``."""
        state = _State(args)
        i = 0
        length = len(fmt)
        while i < length:
            c = fmt[i]
            i += 1
            if c != "%":
                state.put(c)
                continue
            state.reset()
            while True:
                c = fmt[i] if i < length else "\0"
                i += 1
                conv = self._table[ord(c)] if ord(c) < _TABLE_SIZE else _badconv
                if not conv(state, c):
                    break
        return state.text()


_DEFAULT = Format()


def sprint(fmt: str, *args: Any) -> str:
    """Format with the default conversion table."""
    return _DEFAULT.format(fmt, *args)