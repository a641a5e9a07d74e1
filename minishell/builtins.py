"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import TextIO

from .env import Environment, _atoi
from .errors import ShellError

BUILTINS = frozenset({"cd", "pwd", "exit", "env", "export", "unset"})


class ExitRequest(Exception):
    """Raised by the exit builtin; ``status`` is the requested exit status."""

    def __init__(self, status: int = 0) -> None:
        super().__init__(status)
        self.status = status


def is_builtin(name: str | None) -> bool:
    """Tell whether ``name`` is a builtin command."""
    return name in BUILTINS


def pwd(out: TextIO) -> None:
    """Write the current working directory."""
    out.write(os.getcwd() + "\n")


def cd(args: Sequence[str], env: Environment, out: TextIO) -> None:
    """Change directory, then print the new working directory.

    With no argument, or one starting with ``~``, go to HOME.  An argument
    starting with ``/`` is used as is; anything else is taken relative to
    the current directory.
    """
    target = args[1] if len(args) > 1 else None
    if target is None or target.startswith("~"):
        home = env.get("HOME")
        if home is None:
            raise ShellError("HOME not set", source="cd")
        destination = home
    elif target.startswith("/"):
        destination = target
    else:
        destination = f"{os.getcwd()}/{target}"
    try:
        os.chdir(destination)
    except OSError as exc:
        raise ShellError(exc.strerror or str(exc), source=destination) from exc
    pwd(out)


def exit_shell(args: Sequence[str], out: TextIO) -> None:
    """Ask the shell to exit, with the status given as the first argument."""
    if len(args) > 1:
        out.write("exit\n")
        raise ExitRequest(_atoi(args[1]))
    raise ExitRequest(0)


def print_env(env: Environment, out: TextIO) -> None:
    """Write every variable as ``KEY=VALUE``."""
    for key, value in env:
        out.write(f"{key}={value}\n")


def export(env: Environment, assignment: str | None) -> None:
    """Set a variable from a ``KEY=VALUE`` assignment."""
    if assignment is None:
        raise ShellError("missing assignment", source="export")
    key, sep, value = assignment.partition("=")
    if not sep:
        raise ShellError(f"'{assignment}': not a valid identifier", source="export")
    env.set(key, value)


def unset(env: Environment, key: str | None) -> None:
    """Remove a variable; a missing one is ignored."""
    if key is not None:
        env.unset(key)