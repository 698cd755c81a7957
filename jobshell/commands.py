"""Parsing of the shell's command prefixes and suffixes."""

from __future__ import annotations

import re
import signal
from typing import Sequence

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class CommandError(ValueError):
    """Raised when a command's arguments are malformed."""


def _atoi(text: str) -> int:
    """Read a leading integer the way the shell reads numbers: 0 when absent."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def strip_respawn(args: Sequence[str]) -> tuple[list[str], bool]:
    """Remove a trailing ``+`` marker.

    Returns the remaining arguments and whether the command is respawnable.
    """
    if args and args[-1] == "+":
        return list(args[:-1]), True
    return list(args), False


def strip_alarm(args: Sequence[str]) -> tuple[list[str], int]:
    """Handle ``alarm-thread SECONDS COMMAND...``.

    Returns the command to run and the number of seconds after which it is
    killed; 0 and the unchanged arguments when this is not an alarm command.
    """
    if len(args) < 3 or args[0] != "alarm-thread":
        return list(args), 0
    seconds = _atoi(args[1])
    if seconds == 0:
        return list(args), 0
    return list(args[2:]), seconds


def strip_delay(args: Sequence[str]) -> tuple[list[str], int | None]:
    """Handle ``delay-thread SECONDS COMMAND...``.

    Returns the command to run and the delay in seconds, or None as the delay
    when this is not a delay command.
    """
    if len(args) < 3 or args[0] != "delay-thread":
        return list(args), None
    delay = _atoi(args[1])
    if delay < 0:
        raise CommandError(f"invalid delay: {args[1]}")
    return list(args[2:]), delay


def parse_mask(args: Sequence[str]) -> tuple[list[int], list[str]]:
    """Handle ``mask SIGNAL... -c COMMAND...``.

    Returns the signal numbers to block in the child and the command to run.
    """
    if not args or args[0] != "mask":
        raise CommandError("not a mask command")
    valid = signal.valid_signals()
    signals: list[int] = []
    command: list[str] | None = None
    for position, token in enumerate(args[1:], start=1):
        if token == "-c":
            command = list(args[position + 1:])
            break
        number = _atoi(token)
        if number <= 0 or number not in valid:
            raise CommandError(f"invalid argument: {token}")
        signals.append(number)
    if not signals:
        raise CommandError("at least one signal is required")
    if command is None:
        raise CommandError("missing arguments")
    if not command:
        raise CommandError("missing command after -c")
    return signals, command


def parse_position(args: Sequence[str]) -> int:
    """Job position given to ``fg`` or ``bg``; 1 when none is given."""
    return _atoi(args[1]) if len(args) > 1 else 1