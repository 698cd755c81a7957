"""Terminal signal dispositions and signal masking."""

from __future__ import annotations

import signal
from contextlib import contextmanager
from typing import Iterator

TERMINAL_SIGNALS = (
    signal.SIGINT,
    signal.SIGQUIT,
    signal.SIGTSTP,
    signal.SIGTTIN,
    signal.SIGTTOU,
)


def terminal_signals(handler):
    """Install ``handler`` for every terminal-related signal.

    Returns the previous handlers keyed by signal number.
    """
    return {signum: signal.signal(signum, handler) for signum in TERMINAL_SIGNALS}


def ignore_terminal_signals():
    """Ignore terminal signals, as the shell itself must."""
    return terminal_signals(signal.SIG_IGN)


def restore_terminal_signals():
    """Give terminal signals their default action, as children need."""
    return terminal_signals(signal.SIG_DFL)


def mask_signal(signum: int, how: int) -> set[int]:
    """Block or unblock one signal; ``how`` is SIG_BLOCK or SIG_UNBLOCK.

    Returns the previous signal mask.
    """
    return set(signal.pthread_sigmask(how, {signum}))


@contextmanager
def blocked_sigchld() -> Iterator[None]:
    """Keep SIGCHLD blocked for the duration of the block."""
    previous = mask_signal(signal.SIGCHLD, signal.SIG_BLOCK)
    try:
        yield
    finally:
        if signal.SIGCHLD not in previous:
            mask_signal(signal.SIGCHLD, signal.SIG_UNBLOCK)