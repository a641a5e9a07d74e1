"""Shell error types and the standard error message format."""

from __future__ import annotations

import sys
from typing import TextIO

SHELL_NAME = "mini-shell: "
TOO_MANY_ARGUMENTS = "too many arguments"
MISSING_NUMERIC = "missing numeric aguments"
PERMISSION_DENIED = "permission denied"
IS_DIRECTORY = "is a directory"
NOT_DIRECTORY = "is not a directory"
NOT_EXISTING = "file or directory doesn't exist"
SYNTAX_ERROR = "Syntax error: "
COMMAND_NOT_FOUND = "Command not found."
DECLARE = "declare -x"

SYNTAX_EXIT_STATUS = 258


class ShellError(Exception):
    """Base error of the shell, carrying a message source and an exit status."""

    exit_code = 1
    default_source: str | None = None

    def __init__(
        self, message: str, source: str | None = None, exit_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source if source is not None else self.default_source
        if exit_code is not None:
            self.exit_code = exit_code

    def formatted(self) -> str:
        """The error as the shell reports it."""
        return format_shell_error(self.source, self.message)


class ShellSyntaxError(ShellError):
    """A syntax error in the command line."""

    exit_code = SYNTAX_EXIT_STATUS
    default_source = SYNTAX_ERROR


class LexError(ShellSyntaxError):
    """The input could not be split into tokens."""


def format_shell_error(source: str | None, message: str) -> str:
    """Build a one-line error message prefixed with the shell name."""
    prefix = f"{source}: " if source else ""
    return f"{SHELL_NAME}{prefix}{message}"


def print_shell_error(source: str | None, message: str, stream: TextIO | None = None) -> None:
    """Write an error message line to ``stream`` (standard error by default)."""
    target = stream if stream is not None else sys.stderr
    target.write(format_shell_error(source, message) + "\n")