"""The interactive shell: built-ins, launching and job control."""

from __future__ import annotations

import os
import signal
import sys
import threading
import time
from contextlib import contextmanager, suppress
from typing import IO, Iterable, Iterator, NoReturn

from jobshell.commands import (
    CommandError,
    parse_mask,
    parse_position,
    strip_alarm,
    strip_delay,
    strip_respawn,
)
from jobshell.jobs import Job, JobList, JobState, LaunchSpec, Status, analyze_status
from jobshell.parsing import RedirectionError, parse_redirections, split_command
from jobshell.signals import (
    blocked_sigchld,
    ignore_terminal_signals,
    restore_terminal_signals,
)

PROMPT = "COMMAND->"


class _ChildSetupError(Exception):
    """A failure while preparing a child before exec."""


def _redirect(path: str, flags: int, target: int, open_label: str, dup_label: str) -> None:
    try:
        fd = os.open(path, flags, 0o666)
    except OSError as error:
        raise _ChildSetupError(f"{open_label}: {error.strerror}") from error
    try:
        os.dup2(fd, target)
    except OSError as error:
        raise _ChildSetupError(f"{dup_label}: {error.strerror}") from error
    finally:
        if fd != target:
            os.close(fd)


def _block_sigchld_in_thread() -> None:
    signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGCHLD})


def _kill_after(pid: int, seconds: int) -> None:
    _block_sigchld_in_thread()
    time.sleep(seconds)
    with suppress(ProcessLookupError):
        os.kill(pid, signal.SIGKILL)


class Shell:
    """A small job-control shell reading commands from ``stdin``."""

    def __init__(self, stdin: IO[str], stdout: IO[str]) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self.jobs = JobList("lista")
        self._lock = threading.RLock()
        self._tty_fd = self._terminal_fd(stdin)
        self._shell_pgid = os.getpgrp()
        self._builtins = {
            "cd": self._cd,
            "jobs": self._list_jobs,
            "bg": self._background,
            "fg": self._foreground,
        }

    @staticmethod
    def _terminal_fd(stream: IO[str]) -> int | None:
        try:
            fd = stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None
        return fd if os.isatty(fd) else None

    def run(self) -> int:
        """Read and execute commands until end of input."""
        if self._tty_fd is not None:
            with suppress(OSError):
                os.setpgid(0, 0)
        self._shell_pgid = os.getpgrp()
        ignore_terminal_signals()
        signal.signal(signal.SIGCHLD, self._on_sigchld)
        self._give_terminal(self._shell_pgid)
        while True:
            self._write(PROMPT)
            line = self.stdin.readline()
            if not line:
                self._write("\nBye\n")
                return 0
            self.execute(line)

    def execute(self, line: str) -> None:
        """Execute one command line."""
        args, background = split_command(line)
        try:
            args, filein, fileout = parse_redirections(args)
        except RedirectionError as error:
            print(error, file=sys.stderr)
            return
        if not args:
            return
        builtin = self._builtins.get(args[0])
        if builtin is not None:
            builtin(args)
            return

        args, respawnable = strip_respawn(args)
        if respawnable:
            self._write("+ \n")
            background = True
        if not args:
            return
        args, timeout = strip_alarm(args)
        try:
            args, delay = strip_delay(args)
        except CommandError as error:
            print(f"Error: {error}", file=sys.stderr)
            return
        if delay is not None:
            spec = LaunchSpec(
                args=tuple(args),
                background=True,
                filein=filein,
                fileout=fileout,
                respawnable=respawnable,
                timeout=timeout,
                delay=delay,
            )
            threading.Thread(target=self._delayed_launch, args=(spec,), daemon=True).start()
            return

        mask: list[int] | None = None
        if args[0] == "mask":
            try:
                mask, args = parse_mask(args)
            except CommandError as error:
                print(f"Error: {error}", file=sys.stderr)
                return
        spec = LaunchSpec(
            args=tuple(args),
            background=background,
            filein=filein,
            fileout=fileout,
            respawnable=respawnable,
            timeout=timeout,
        )
        self.launch(spec, mask)

    def launch(self, spec: LaunchSpec, mask: Iterable[int] | None = None) -> int | None:
        """Start a command; wait for it unless it runs in the background.

        ``mask`` is the set of signals the child starts with blocked.
        Returns the child's pid, or None if it could not be created.
        """
        with blocked_sigchld():
            self._flush()
            try:
                pid = os.fork()
            except OSError as error:
                print(f"Fork have not succeeded: {error.strerror}", file=sys.stderr)
                return None
            if pid == 0:
                self._exec_child(spec, mask)
            with suppress(OSError):
                os.setpgid(pid, pid)
            if spec.timeout > 0:
                threading.Thread(
                    target=_kill_after, args=(pid, spec.timeout), daemon=True
                ).start()
            command = spec.args[0]
            if spec.background:
                state = JobState.RESPAWNABLE if spec.respawnable else JobState.BACKGROUND
                with self._guard():
                    self.jobs.add(Job(pid, command, state, spec))
                self._write(f"Background job running... pid: {pid},command: {command} \n")
            else:
                self._wait_foreground(pid, command, spec)
            return pid

    def _exec_child(self, spec: LaunchSpec, mask: Iterable[int] | None) -> NoReturn:
        try:
            with suppress(OSError):
                os.setpgid(0, 0)
            if not spec.background:
                self._give_terminal(os.getpid())
            restore_terminal_signals()
            signal.pthread_sigmask(signal.SIG_SETMASK, set(mask or ()))
            if spec.filein is not None:
                _redirect(spec.filein, os.O_RDONLY, 0, "open_in", "Dup2: file in")
            if spec.fileout is not None:
                _redirect(
                    spec.fileout, os.O_WRONLY | os.O_CREAT, 1, "open_out", "Dup2: file out"
                )
            try:
                os.execvp(spec.args[0], list(spec.args))
            except OSError:
                os.write(1, f"Error, command not found: {spec.args[0]} \n".encode())
        except _ChildSetupError as error:
            os.write(2, f"{error}\n".encode())
        finally:
            os._exit(1)

    def _wait_foreground(self, pid: int, command: str, spec: LaunchSpec | None) -> None:
        self._give_terminal(pid)
        try:
            _, status = os.waitpid(pid, os.WUNTRACED)
        except ChildProcessError:
            self._write("\nError in waitpid\n")
            raise SystemExit(1)
        finally:
            self._give_terminal(self._shell_pgid)
        reason, info = analyze_status(status)
        self._write(f"Foreground pid: {pid}, command: {command}, {reason}, info: {info} \n")
        if reason is Status.SUSPENDED:
            with self._guard():
                self.jobs.add(Job(pid, command, JobState.STOPPED, spec))

    def _delayed_launch(self, spec: LaunchSpec) -> None:
        _block_sigchld_in_thread()
        time.sleep(spec.delay)
        self.launch(spec)

    def _on_sigchld(self, signum: int | None = None, frame: object = None) -> None:
        """Reap children and update the job list."""
        with self._guard():
            while True:
                try:
                    pid, status = os.waitpid(
                        -1, os.WNOHANG | os.WUNTRACED | os.WCONTINUED
                    )
                except ChildProcessError:
                    break
                if pid == 0:
                    break
                reason, _ = analyze_status(status)
                job = self.jobs.get_by_pid(pid)
                if job is None:
                    continue
                if reason is Status.SUSPENDED:
                    job.state = JobState.STOPPED
                elif reason is Status.CONTINUED:
                    job.state = JobState.BACKGROUND
                else:
                    if job.state is JobState.RESPAWNABLE and job.spec is not None:
                        self.launch(job.spec)
                    self.jobs.remove(job)

    def _cd(self, args: list[str]) -> None:
        if len(args) < 2:
            print("Path: no directory given", file=sys.stderr)
            return
        try:
            os.chdir(args[1])
        except OSError as error:
            print(f"Path: {error.strerror}", file=sys.stderr)

    def _list_jobs(self, args: list[str]) -> None:
        with self._guard():
            self._write(self.jobs.format())

    def _background(self, args: list[str]) -> None:
        with self._guard():
            job = self.jobs.get_by_position(parse_position(args))
            if job is not None and job.state is JobState.STOPPED:
                job.state = JobState.BACKGROUND
                with suppress(ProcessLookupError):
                    os.killpg(job.pgid, signal.SIGCONT)

    def _foreground(self, args: list[str]) -> None:
        with blocked_sigchld():
            with self._lock:
                job = self.jobs.get_by_position(parse_position(args))
                if job is None:
                    return
                self.jobs.remove(job)
            self._give_terminal(job.pgid)
            if job.state is JobState.STOPPED:
                with suppress(ProcessLookupError):
                    os.killpg(job.pgid, signal.SIGCONT)
            self._wait_foreground(job.pgid, job.command, job.spec)

    @contextmanager
    def _guard(self) -> Iterator[None]:
        with blocked_sigchld(), self._lock:
            yield

    def _give_terminal(self, pgid: int) -> None:
        if self._tty_fd is None:
            return
        with suppress(OSError):
            os.tcsetpgrp(self._tty_fd, pgid)

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _flush(self) -> None:
        for stream in (self.stdout, sys.stdout, sys.stderr):
            with suppress(Exception):
                stream.flush()


def main(argv: list[str] | None = None) -> int:
    """Run the shell on the process's standard streams."""
    return Shell(sys.stdin, sys.stdout).run()