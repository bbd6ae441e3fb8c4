"""Background processes started by the shell and the collection of their statuses."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Sequence

from .utils import RcError


@dataclass
class _Job:
    pid: int
    alive: bool = True
    status: int = 0


class JobTable:
    """Children of the shell, newest first, until their status has been collected."""

    def __init__(self) -> None:
        self._jobs: list[_Job] = []

    def spawn(self, argv: Sequence[str]) -> int:
        """Start a program and record it; return its process id."""
        args = list(argv)
        if not args:
            raise ValueError("empty command")
        try:
            pid = os.posix_spawnp(args[0], args, dict(os.environ))
        except OSError as exc:
            raise RcError(f"{args[0]}: {exc.strerror}") from exc
        self._jobs.insert(0, _Job(pid))
        return pid

    def _find(self, pid: int) -> Optional[_Job]:
        for job in self._jobs:
            if job.pid == pid or (pid == -1 and not job.alive):
                return job
        return None

    def wait(self, pid: int = -1) -> tuple[int, int]:
        """Wait for a child (any child with ``pid`` -1) and return (pid, wait status).

        The child is removed from the table once its status is returned.
        """
        job = self._find(pid)
        if pid != -1 and job is None:
            raise ChildProcessError(os.strerror(10) if False else f"wait: no child {pid}")
        while job is None or job.alive:
            try:
                ret, status = os.waitpid(pid, 0)
            except ChildProcessError:
                raise RuntimeError("lost child") from None
            for candidate in self._jobs:
                if candidate.pid == ret:
                    candidate.alive = False
                    candidate.status = status
                    if pid == -1:
                        job = candidate
                    break
        self._jobs.remove(job)
        return job.pid, job.status

    def apids(self) -> list[str]:
        """Process ids of the children still running, oldest first."""
        return [str(job.pid) for job in reversed(self._jobs) if job.alive]

    def wait_all(self) -> list[tuple[int, int]]:
        """Wait for every child; return (pid, wait status) in the order they were reaped."""
        reaped = []
        while self._jobs:
            reaped.append(self.wait(-1))
        return reaped