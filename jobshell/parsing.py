"""Command-line tokenising and redirection parsing."""

from __future__ import annotations

_SEPARATORS = frozenset(" \t\n")


class RedirectionError(ValueError):
    """Raised when a redirection operator has no file name after it."""


def split_command(line: str) -> tuple[list[str], bool]:
    """Split a command line into arguments.

    Spaces, tabs and newlines separate arguments. An ``&`` marks the command
    as a background command and ends the line; anything after it is ignored.
    Returns the argument list and the background flag.
    """
    args: list[str] = []
    current: list[str] = []
    background = False
    for char in line:
        if char in _SEPARATORS:
            if current:
                args.append("".join(current))
                current = []
        elif char == "&":
            background = True
            break
        else:
            current.append(char)
    if current:
        args.append("".join(current))
    return args, background


def parse_redirections(args: list[str]) -> tuple[list[str], str | None, str | None]:
    """Extract ``<`` and ``>`` redirections from an argument list.

    The operators must be separate arguments. Returns the remaining
    arguments, the input file and the output file; a later redirection of
    the same kind replaces an earlier one. The input list is left unchanged.
    """
    remaining: list[str] = []
    file_in: str | None = None
    file_out: str | None = None
    tokens = iter(args)
    for token in tokens:
        if token not in ("<", ">"):
            remaining.append(token)
            continue
        target = next(tokens, None)
        if target is None:
            raise RedirectionError("syntax error in redirection")
        if token == "<":
            file_in = target
        else:
            file_out = target
    return remaining, file_in, file_out