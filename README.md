# jobshell

A small interactive Unix shell with job control. Each command runs in its
own process group, foreground commands are given the terminal, and the shell
keeps a list of background and stopped jobs that you can inspect and resume.
It needs a POSIX system.

## Installing

```
pip install .
```

## Running

```
jobshell
```

The prompt is `COMMAND->`. Press Ctrl-D to leave the shell; it prints `Bye`.

## What it understands

| Input | Effect |
|-------|--------|
| `cmd args...` | Run in the foreground, then report its pid and how it ended (`Exited`, `Signaled` or `Suspended`, with the exit code or signal number) |
| `cmd args... &` | Run in the background; anything after `&` is ignored |
| `cmd < in > out` | Redirect standard input and output; spaces around `<` and `>` are required |
| `cd dir` | Change the working directory |
| `jobs` | List background and stopped jobs |
| `bg [n]` | Resume stopped job `n` (default 1) in the background |
| `fg [n]` | Bring job `n` (default 1) to the foreground, continuing it if it was stopped |
| `cmd args... +` | Start a respawnable background job, relaunched each time it ends |
| `alarm-thread secs cmd args...` | Run a command and send it SIGKILL after `secs` seconds |
| `delay-thread secs cmd args...` | Launch the command in the background after `secs` seconds |
| `mask sig... -c cmd args...` | Run a command with the given signal numbers blocked |

Jobs are numbered from the most recently added, starting at 1. A foreground
job stopped with Ctrl-Z is added to the list as `Stopped`.

Output redirection opens the file for writing and creates it if needed, but
does not truncate an existing file.

## Using it from Python

```python
import sys
from jobshell.shell import Shell

Shell(sys.stdin, sys.stdout).run()
```

`Shell.execute(line)` runs a single command line and `Shell.launch(spec, mask)`
starts a command described by a `LaunchSpec`.

The pieces are also usable on their own:

```python
from jobshell.parsing import split_command, parse_redirections

args, background = split_command("sort < data.txt > sorted.txt &")
args, file_in, file_out = parse_redirections(args)
# args == ["sort"], file_in == "data.txt", file_out == "sorted.txt", background is True
```

- `jobshell.parsing`: `split_command`, `parse_redirections` and
  `RedirectionError`.
- `jobshell.jobs`: `JobList`, `Job`, `LaunchSpec`, `JobState`, `Status`,
  `format_job` and `analyze_status`, which decodes a raw wait status into a
  `Status` and its accompanying number.
- `jobshell.commands`: `strip_respawn`, `strip_alarm`, `strip_delay`,
  `parse_mask`, `parse_position` and `CommandError`.
- `jobshell.signals`: `terminal_signals`, `ignore_terminal_signals`,
  `restore_terminal_signals`, `mask_signal` and the `blocked_sigchld`
  context manager.

## What it does not do

There are no pipes, no quoting or escaping, no variables or globbing, no
command history or line editing, and no scripts: each line is split on
whitespace and run as a single command.

## Running the tests

```
pip install ".[test]"
pytest
```