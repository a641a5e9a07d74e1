"""The interactive read-parse-run loop and the command entry point."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Callable, Sequence
from typing import Optional, TextIO

from .builtins import ExitRequest
from .env import Environment
from .errors import ShellError, print_shell_error
from .executor import execute
from .heredoc import prepare_heredocs
from .lexer import tokenize
from .parser import parse

PROMPT = "minishell: "
INTERRUPTED_STATUS = 130

LineReader = Callable[[str], Optional[str]]


def _read_input(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


class Shell:
    """Reads command lines, parses them and runs them against an environment."""

    def __init__(
        self,
        env: Environment,
        read_line: LineReader | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.env = env
        self.read_line = read_line or _read_input
        self.err = err if err is not None else sys.stderr
        self.last_status = 0
        self.interrupted = False
        self.heredoc_directory: str | os.PathLike[str] | None = None

    def handle_sigint(self, signum: int = signal.SIGINT, frame: object = None) -> None:
        """Note that an interrupt arrived."""
        self.interrupted = True

    def run_line(self, line: str) -> int:
        """Parse and run one command line; return its exit status.

        ExitRequest from the exit builtin is passed on to the caller.
        """
        if not line:
            return self.last_status
        self.interrupted = False
        try:
            tree = parse(tokenize(line))
            prepare_heredocs(tree, self.read_line, self.heredoc_directory)
        except ShellError as exc:
            print_shell_error(exc.source, exc.message, self.err)
            self.last_status = exc.exit_code
            return self.last_status
        except KeyboardInterrupt:
            self.handle_sigint()
        if self.interrupted:
            sys.stdout.write("\n")
            self.last_status = INTERRUPTED_STATUS
            return self.last_status
        try:
            self.last_status = execute(tree, self.env)
        except KeyboardInterrupt:
            self.handle_sigint()
            sys.stdout.write("\n")
            self.last_status = INTERRUPTED_STATUS
        return self.last_status

    def loop(self) -> int:
        """Prompt and run lines until end of input or exit; return the exit status."""
        while True:
            try:
                line = self.read_line(PROMPT)
            except KeyboardInterrupt:
                sys.stdout.write("\n")
                continue
            if line is None:
                sys.stdout.write("exit\n")
                sys.stdout.flush()
                return 0
            if not line:
                continue
            try:
                self.run_line(line)
            except ExitRequest as request:
                return request.status


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive shell with the process environment."""
    try:
        import readline  # noqa: F401  (gives input() line editing and history)
    except ImportError:
        pass
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    shell = Shell(Environment(os.environ))
    return shell.loop()