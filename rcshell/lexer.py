"""Character sources and the lexical analyser that turns shell text into tokens."""

from __future__ import annotations

import enum
import string
import warnings
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, TextIO, Union

from .utils import RcError, RedirType

EOF = ""
CLOSED = -1
UNGETSIZE = 2

_DIGITS = frozenset("0123456789")
_NONWORD = frozenset("\0\t\n !#$&'();<=>@\\^`{|}~")
_QUOTABLE = _NONWORD | frozenset("*?[]")
_VARCHARS = frozenset(string.ascii_letters + string.digits + "*_")
_GLOB = frozenset("?[*")


def _nonword(c: str) -> bool:
    return c in _NONWORD


def _var_nonword(c: str) -> bool:
    return c not in _VARCHARS


def quotep(s: str, dollar: bool) -> bool:
    """True if ``s`` needs quoting, as a variable name when ``dollar`` is set."""
    if dollar:
        return any(_var_nonword(c) for c in s)
    return any(c in _QUOTABLE for c in s)


class TokenKind(enum.Enum):
    """Kinds of token."""

    WORD = enum.auto()
    IF = enum.auto()
    FN = enum.auto()
    IN = enum.auto()
    NOT = enum.auto()
    FOR = enum.auto()
    ELSE = enum.auto()
    SWITCH = enum.auto()
    WHILE = enum.auto()
    CASE = enum.auto()
    BANG = enum.auto()
    SUBSHELL = enum.auto()
    TWIDDLE = enum.auto()
    BACKBACK = enum.auto()
    BACKQUOTE = enum.auto()
    COUNT = enum.auto()
    FLAT = enum.auto()
    DOLLAR = enum.auto()
    SUB = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    NEWLINE = enum.auto()
    SEMI = enum.auto()
    CARET = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()
    EQUALS = enum.auto()
    AMPERSAND = enum.auto()
    ANDAND = enum.auto()
    OROR = enum.auto()
    PIPE = enum.auto()
    REDIR = enum.auto()
    SREDIR = enum.auto()
    DUP = enum.auto()
    END = enum.auto()
    OTHER = enum.auto()


_KEYWORDS = {
    "if": TokenKind.IF,
    "fn": TokenKind.FN,
    "in": TokenKind.IN,
    "not": TokenKind.NOT,
    "for": TokenKind.FOR,
    "else": TokenKind.ELSE,
    "switch": TokenKind.SWITCH,
    "while": TokenKind.WHILE,
    "case": TokenKind.CASE,
}

_PUNCT = {
    ";": TokenKind.SEMI,
    "^": TokenKind.CARET,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}


@dataclass(frozen=True)
class Token:
    """A token; redirection and pipe tokens carry their descriptors."""

    kind: TokenKind
    value: str = ""
    meta: Optional[tuple] = None
    quoted: bool = False
    redir: Optional[RedirType] = None
    fd: Optional[int] = None
    left: Optional[int] = None
    right: Optional[int] = None


class ScanError(RcError):
    """A lexical error, reported with the line it was found on."""

    def __init__(self, message: str, lineno: int) -> None:
        super().__init__(f"line {lineno}: {message}")
        self.message = message
        self.lineno = lineno


class CharSource:
    """Characters from a string or a text stream, with a small push-back stack."""

    def __init__(self, text: Union[str, TextIO]) -> None:
        if isinstance(text, str):
            self._buf: str = text
            self._stream: Optional[TextIO] = None
        else:
            self._buf = ""
            self._stream = text
        self._pos = 0
        self._pushback: list[str] = []
        self.last: Optional[str] = None

    def _raw(self) -> str:
        while self._pos >= len(self._buf):
            if self._stream is None:
                return EOF
            chunk = self._stream.readline()
            if not chunk:
                return EOF
            self._buf, self._pos = chunk, 0
        c = self._buf[self._pos]
        self._pos += 1
        return c

    def getc(self) -> str:
        """Return the next character, or the empty string at end of input."""
        if self._pushback:
            c = self._pushback.pop()
        else:
            c = self._raw()
            while c == "\0":
                warnings.warn("null character ignored", RuntimeWarning, stacklevel=2)
                c = self._raw()
        self.last = c
        return c

    def ungetc(self, c: str) -> None:
        """Push a character (or end of input) back to be read again."""
        if len(self._pushback) >= UNGETSIZE:
            raise OverflowError("too many characters pushed back")
        self._pushback.append(c)


class _Word(enum.Enum):
    NW = enum.auto()
    RW = enum.auto()
    KW = enum.auto()


class Lexer:
    """Splits shell input into tokens."""

    def __init__(self, source: Union[CharSource, str, TextIO]) -> None:
        self.source = source if isinstance(source, CharSource) else CharSource(source)
        self.lineno = 1
        self._w = _Word.NW
        self._dollar = False
        self._errset = False
        self._err_newline = False

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def tokens(self) -> Iterator[Token]:
        """Yield tokens until the end of input (the END token is not yielded)."""
        while True:
            token = self.next_token()
            if token.kind is TokenKind.END:
                return
            yield token

    def _error(self, message: str) -> None:
        line = self.lineno
        self._skiptonl()
        self._errset = True
        self._err_newline = self.source.last == "\n"
        raise ScanError(message, line)

    def _skiptonl(self) -> None:
        src = self.source
        if src.last in ("\n", EOF):
            return
        c = src.getc()
        while c not in ("\n", EOF):
            c = src.getc()
        if c == EOF:
            src.ungetc(c)

    def _free_caret(self, c: str) -> Optional[Token]:
        if self._w is _Word.NW:
            return None
        self._w = _Word.NW
        self.source.ungetc(c)
        return Token(TokenKind.CARET, "^")

    def next_token(self) -> Token:
        """Return the next token; raise ScanError on malformed input."""
        if self._errset:
            self._errset = False
            if self._err_newline:
                self.lineno += 1
            return Token(TokenKind.NEWLINE, "\n")
        nonword = _var_nonword if self._dollar else _nonword
        src = self.source
        while True:
            c = src.getc()
            while c in (" ", "\t"):
                self._w = _Word.NW
                c = src.getc()
            if c != "(":
                self._dollar = False
            if c == EOF:
                return Token(TokenKind.END)
            if not nonword(c):
                caret = self._free_caret(c)
                if caret is not None:
                    return caret
                self._w = _Word.RW
                return self._word(c, nonword, False)
            if c == "\\":
                c = src.getc()
                if c == "\n":
                    self.lineno += 1
                    continue
                src.ungetc(c)
                caret = self._free_caret("\\")
                if caret is not None:
                    return caret
                return self._word(src.getc(), nonword, True)
            return self._operator(c)

    def _operator(self, c: str) -> Token:
        src = self.source
        if c in "`!@~$'=":
            caret = self._free_caret(c)
            if caret is not None:
                return caret
            if c in "!@~=":
                self._w = _Word.KW
        if c == "!":
            return Token(TokenKind.BANG, c)
        if c == "@":
            return Token(TokenKind.SUBSHELL, c)
        if c == "~":
            return Token(TokenKind.TWIDDLE, c)
        if c == "=":
            return Token(TokenKind.EQUALS, c)
        if c == "`":
            nxt = src.getc()
            if nxt == "`":
                return Token(TokenKind.BACKBACK, "``")
            src.ungetc(nxt)
            return Token(TokenKind.BACKQUOTE, c)
        if c == "$":
            self._dollar = True
            nxt = src.getc()
            if nxt == "#":
                return Token(TokenKind.COUNT, "$#")
            if nxt in ("^", '"'):
                return Token(TokenKind.FLAT, "$" + nxt)
            src.ungetc(nxt)
            return Token(TokenKind.DOLLAR, c)
        if c == "'":
            return self._quoted()
        if c == "(":
            kind = TokenKind.SUB if self._w is _Word.RW else TokenKind.LPAREN
            self._w = _Word.NW
            return Token(kind, c)
        if c == "#":
            c = src.getc()
            while c != "\n":
                if c == EOF:
                    return Token(TokenKind.END)
                c = src.getc()
        if c == "\n":
            self.lineno += 1
            self._w = _Word.NW
            return Token(TokenKind.NEWLINE, c)
        if c in _PUNCT:
            self._w = _Word.NW
            return Token(_PUNCT[c], c)
        if c == "&":
            self._w = _Word.NW
            nxt = src.getc()
            if nxt == "&":
                return Token(TokenKind.ANDAND, "&&")
            src.ungetc(nxt)
            return Token(TokenKind.AMPERSAND, c)
        if c == "|":
            return self._pipe()
        if c in "<>":
            return self._redirection(c)
        self._w = _Word.NW
        return Token(TokenKind.OTHER, c)

    def _word(self, c: str, nonword: Callable[[str], bool], after_backslash: bool) -> Token:
        src = self.source
        buf: list[str] = []
        while True:
            if not after_backslash:
                while c != EOF and not nonword(c):
                    buf.append(c)
                    c = src.getc()
                if c != "\\":
                    break
                c = src.getc()
            after_backslash = False
            if c == "\n":
                self.lineno += 1
                c = " "
                break
            if nonword is _var_nonword:
                src.ungetc(c)
                c = "\\"
                break
            buf.append("\\")
        src.ungetc(c)
        text = "".join(buf)
        self._w = _Word.KW
        keyword = _KEYWORDS.get(text)
        if keyword is not None:
            return Token(keyword, text)
        self._w = _Word.RW
        meta = None
        if any(ch in _GLOB for ch in text):
            meta = tuple(ch in _GLOB for ch in text)
        return Token(TokenKind.WORD, text, meta=meta)

    def _quoted(self) -> Token:
        src = self.source
        self._w = _Word.RW
        buf: list[str] = []
        while True:
            c = src.getc()
            if c == "'":
                c = src.getc()
                if c != "'":
                    break
            if c == EOF:
                self._w = _Word.NW
                self._error("eof in quoted string")
            buf.append(c)
            if c == "\n":
                self.lineno += 1
        src.ungetc(c)
        return Token(TokenKind.WORD, "".join(buf), quoted=True)

    def _number(self, first: str) -> tuple[int, str]:
        n = int(first)
        c = self.source.getc()
        while c in _DIGITS:
            n = n * 10 + int(c)
            c = self.source.getc()
        return n, c

    def _getpair(self, c: str) -> tuple[Optional[int], Optional[int]]:
        src = self.source
        if c != "[":
            src.ungetc(c)
            return None, None
        c = src.getc()
        if c not in _DIGITS:
            self._error("expected digit after '['")
        left, c = self._number(c)
        if c == "]":
            return left, None
        if c != "=":
            self._error("expected '=' or ']' after digit")
        c = src.getc()
        if c not in _DIGITS:
            if c != "]":
                self._error("expected digit or ']' after '='")
            return left, CLOSED
        right, c = self._number(c)
        if c != "]":
            self._error("expected ']' after digit")
        return left, right

    def _pipe(self) -> Token:
        self._w = _Word.NW
        c = self.source.getc()
        if c == "|":
            return Token(TokenKind.OROR, "||")
        left, right = self._getpair(c)
        if left is None:
            left = 1
        if right is None:
            right = 0
        if right == CLOSED:
            self._error("expected digit after '='")
        return Token(TokenKind.PIPE, "|", left=left, right=right)

    def _redirection(self, first: str) -> Token:
        src = self.source
        c = src.getc()
        if first == ">":
            fd = 1
            if c == ">":
                c = src.getc()
                rtype, op = RedirType.APPEND, ">>"
            else:
                rtype, op = RedirType.CREATE, ">"
        else:
            fd = 0
            if c == "<":
                c = src.getc()
                if c == "<":
                    c = src.getc()
                    rtype, op = RedirType.HERESTRING, "<<<"
                else:
                    rtype, op = RedirType.HEREDOC, "<<"
            else:
                rtype, op = RedirType.FROM, "<"
        self._w = _Word.NW
        left, right = self._getpair(c)
        if right is None:
            if left is not None:
                return Token(TokenKind.SREDIR, op, redir=rtype, fd=left)
            kind = (
                TokenKind.REDIR
                if rtype in (RedirType.FROM, RedirType.CREATE)
                else TokenKind.SREDIR
            )
            return Token(kind, op, redir=rtype, fd=fd)
        return Token(TokenKind.DUP, op, redir=rtype, left=left, right=right)