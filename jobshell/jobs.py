"""Job records, the job list and wait-status interpretation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class Status(Enum):
    """Why ``waitpid`` reported a child."""

    SUSPENDED = "Suspended"
    SIGNALED = "Signaled"
    EXITED = "Exited"
    CONTINUED = "Continued"

    def __str__(self) -> str:
        return self.value


class JobState(Enum):
    """State of a job kept by the shell."""

    FOREGROUND = "Foreground"
    BACKGROUND = "Background"
    STOPPED = "Stopped"
    RESPAWNABLE = "Respawnable"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LaunchSpec:
    """Everything needed to start (or restart) a command."""

    args: tuple[str, ...]
    background: bool = False
    filein: str | None = None
    fileout: str | None = None
    respawnable: bool = False
    timeout: int = 0
    delay: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(eq=False)
class Job:
    """A process group tracked by the shell."""

    pgid: int
    command: str
    state: JobState
    spec: LaunchSpec | None = field(default=None)


class JobList:
    """Jobs in most-recent-first order, addressed by 1-based position."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._jobs: list[Job] = []

    def add(self, job: Job) -> None:
        """Insert a job at the head of the list."""
        self._jobs.insert(0, job)

    def remove(self, job: Job) -> None:
        """Remove the given job; raise ValueError if it is not in the list."""
        for index, candidate in enumerate(self._jobs):
            if candidate is job:
                del self._jobs[index]
                return
        raise ValueError(f"job {job.pgid} is not in {self.name}")

    def get_by_pid(self, pid: int) -> Job | None:
        """Return the first job whose process group id is ``pid``."""
        return next((job for job in self._jobs if job.pgid == pid), None)

    def get_by_position(self, position: int) -> Job | None:
        """Return the job at 1-based ``position``, or None if out of range."""
        if 1 <= position <= len(self._jobs):
            return self._jobs[position - 1]
        return None

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(list(self._jobs))

    def format(self) -> str:
        """Render the list the way the ``jobs`` command shows it."""
        lines = [f"Contents of {self.name}:\n"]
        lines.extend(
            f" [{position}] {format_job(job)}\n"
            for position, job in enumerate(self._jobs, start=1)
        )
        return "".join(lines)


def format_job(job: Job) -> str:
    """One-line description of a job."""
    return f"pid: {job.pgid}, command: {job.command}, state: {job.state}"


def analyze_status(status: int) -> tuple[Status, int]:
    """Interpret a raw wait status.

    Returns the reason and its detail: the stop signal, 0 when continued,
    the terminating signal, or the exit code.
    """
    if os.WIFSTOPPED(status):
        return Status.SUSPENDED, os.WSTOPSIG(status)
    if os.WIFCONTINUED(status):
        return Status.CONTINUED, 0
    if os.WIFSIGNALED(status):
        return Status.SIGNALED, os.WTERMSIG(status)
    return Status.EXITED, os.WEXITSTATUS(status)