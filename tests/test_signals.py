import signal

import pytest

from jobshell.signals import (
    TERMINAL_SIGNALS,
    blocked_sigchld,
    ignore_terminal_signals,
    mask_signal,
    restore_terminal_signals,
    terminal_signals,
)


@pytest.fixture
def saved_handlers():
    saved = {signum: signal.getsignal(signum) for signum in TERMINAL_SIGNALS}
    yield saved
    for signum, handler in saved.items():
        signal.signal(signum, handler)


def _current_mask():
    return signal.pthread_sigmask(signal.SIG_BLOCK, [])


def test_terminal_signals_cover_job_control_signals(saved_handlers):
    previous = terminal_signals(signal.SIG_IGN)
    assert set(previous) == {
        signal.SIGINT,
        signal.SIGQUIT,
        signal.SIGTSTP,
        signal.SIGTTIN,
        signal.SIGTTOU,
    }


def test_ignore_terminal_signals(saved_handlers):
    ignore_terminal_signals()
    previous = terminal_signals(signal.SIG_DFL)
    assert set(previous.values()) == {signal.SIG_IGN}


def test_restore_terminal_signals(saved_handlers):
    ignore_terminal_signals()
    restore_terminal_signals()
    previous = terminal_signals(signal.SIG_IGN)
    assert set(previous.values()) == {signal.SIG_DFL}


def test_terminal_signals_returns_previous(saved_handlers):
    ignore_terminal_signals()
    previous = terminal_signals(signal.SIG_DFL)
    assert previous == {s: signal.SIG_IGN for s in TERMINAL_SIGNALS}


def test_terminal_signals_custom_handler(saved_handlers):
    def handler(signum, frame):
        pass

    terminal_signals(handler)
    assert signal.getsignal(signal.SIGTSTP) is handler


def test_mask_signal_block_and_unblock():
    mask_signal(signal.SIGUSR1, signal.SIG_UNBLOCK)
    try:
        previous = mask_signal(signal.SIGUSR1, signal.SIG_BLOCK)
        assert signal.SIGUSR1 not in previous
        assert signal.SIGUSR1 in _current_mask()
    finally:
        mask_signal(signal.SIGUSR1, signal.SIG_UNBLOCK)
    assert signal.SIGUSR1 not in _current_mask()


def test_blocked_sigchld():
    mask_signal(signal.SIGCHLD, signal.SIG_UNBLOCK)
    with blocked_sigchld():
        assert signal.SIGCHLD in _current_mask()
    assert signal.SIGCHLD not in _current_mask()


def test_blocked_sigchld_unblocks_after_error():
    mask_signal(signal.SIGCHLD, signal.SIG_UNBLOCK)
    with pytest.raises(RuntimeError):
        with blocked_sigchld():
            raise RuntimeError("boom")
    previous = mask_signal(signal.SIGCHLD, signal.SIG_BLOCK)
    try:
        assert signal.SIGCHLD not in previous
    finally:
        mask_signal(signal.SIGCHLD, signal.SIG_UNBLOCK)


def test_blocked_sigchld_nested_keeps_outer_block():
    mask_signal(signal.SIGCHLD, signal.SIG_UNBLOCK)
    with blocked_sigchld():
        with blocked_sigchld():
            pass
        assert signal.SIGCHLD in _current_mask()
    assert signal.SIGCHLD not in _current_mask()