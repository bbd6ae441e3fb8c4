"""Finding executables along ``$path`` with a per-command directory cache."""

from __future__ import annotations

import errno
import os
import stat
import sys
from typing import Iterable, Optional

from .utils import isabsolute

_X_USR = 0o100
_X_GRP = 0o010
_X_OTH = 0o001
_X_ALL = _X_USR | _X_GRP | _X_OTH


def _report(subject: str, code: int) -> None:
    sys.stderr.write(f"rc: {subject}: {os.strerror(code)}\n")


def _exec_mask(st: os.stat_result) -> int:
    uid = os.geteuid()
    if uid == 0:
        return _X_ALL
    if uid == st.st_uid:
        return _X_USR
    if os.getegid() == st.st_gid or st.st_gid in os.getgroups():
        return _X_GRP
    return _X_OTH


def rc_access(path: str, verbose: bool) -> bool:
    """True if ``path`` is a regular file that this process may execute.

    With ``verbose`` set, the reason for a failure is reported on stderr.
    """
    try:
        st = os.stat(path)
    except OSError as exc:
        if verbose:
            _report(path, exc.errno or errno.ENOENT)
        return False
    if stat.S_ISREG(st.st_mode) and st.st_mode & _exec_mask(st):
        return True
    if verbose:
        _report(path, errno.EACCES)
    return False


def protect(s: str) -> str:
    """Replace every non-printing character with a question mark."""
    return "".join(c if " " <= c <= "~" else "?" for c in s)


def join(path: str, cmd: str) -> str:
    """Join a directory of ``$path`` and a command name."""
    if not path:
        return cmd
    if path.endswith("/"):
        return path + cmd
    return f"{path}/{cmd}"


class CommandFinder:
    """Looks commands up along a search path, remembering where each was found."""

    def __init__(self, path: Iterable[str] = ()) -> None:
        self._path: list[str] = list(path)
        self._cache: dict[str, str] = {}

    @property
    def path(self) -> list[str]:
        """The directories searched, in order."""
        return list(self._path)

    @path.setter
    def path(self, value: Iterable[str]) -> None:
        self._path = list(value)
        self._cache.clear()

    def which(self, name: Optional[str], verbose: bool = False) -> Optional[str]:
        """Return the full pathname of ``name``, or None if it cannot be run."""
        if name is None:
            return None
        if isabsolute(name):
            return name if rc_access(name, verbose) else None
        cached = self._cache.get(name)
        if cached is not None:
            return join(cached, name)
        for directory in self._path:
            full = join(directory, name)
            if rc_access(full, False):
                self._cache[name] = directory
                return full
        if verbose:
            sys.stderr.write(f"rc: cannot find `{protect(name)}'\n")
        return None

    def verify(self, fullpath: str) -> None:
        """Forget the cached directory of a command that is no longer executable."""
        if rc_access(fullpath, False):
            return
        _, slash, cmd = fullpath.rpartition("/")
        if slash and cmd:
            self._cache.pop(cmd, None)