"""Collect here-document input into temporary files before execution."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from typing import Optional, TextIO

from .ast import AstNode, NodeType
from .errors import ShellError
from .tokens import TokenType

DEFAULT_DIRECTORY = "/tmp"
FILE_PREFIX = ".minishell_hd_"
PROMPT = "> "

LineReader = Callable[[str], Optional[str]]


def heredoc_filename(count: int, directory: str | os.PathLike[str] | None = None) -> str:
    """The path of the ``count``-th here-document file."""
    return os.path.join(os.fspath(directory or DEFAULT_DIRECTORY), f"{FILE_PREFIX}{count}")


def read_heredoc(delimiter: str, read_line: LineReader, out: TextIO) -> None:
    """Copy lines from ``read_line`` to ``out`` until the delimiter or end of input."""
    while True:
        try:
            line = read_line(PROMPT)
        except EOFError:
            line = None
        if line is None:
            sys.stdout.write("here-doc delimited by EOF\n")
            return
        if line == delimiter:
            return
        out.write(line + "\n")


def prepare_heredocs(
    node: AstNode | None,
    read_line: LineReader,
    directory: str | os.PathLike[str] | None = None,
    start: int = 0,
) -> int:
    """Turn every ``<<`` redirection in the tree into ``<`` from a filled file.

    Returns the number to use for the next here-document file.
    """
    if node is None:
        return start
    count = start
    if node.type is NodeType.COMMAND:
        for redirection in node.redirections:
            if redirection.type is not TokenType.REDIR_HEREDOC:
                continue
            path = heredoc_filename(count, directory)
            count += 1
            try:
                with open(path, "w", encoding="utf-8") as out:
                    read_heredoc(redirection.file_name, read_line, out)
            except OSError as exc:
                raise ShellError(exc.strerror or str(exc), source=path) from exc
            redirection.type = TokenType.REDIR_IN
            redirection.file_name = path
    count = prepare_heredocs(node.left, read_line, directory, count)
    return prepare_heredocs(node.right, read_line, directory, count)