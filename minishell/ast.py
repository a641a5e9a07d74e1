"""Syntax tree nodes built by the parser, and a debug rendering of them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from collections.abc import Iterable

from .tokens import TokenType

_RESET = "\033[0m"
_PURPLE = "\033[1;35m"
_GREEN = "\033[1;32m"

_REDIRECTION_SYMBOLS = {
    TokenType.REDIR_IN: "<",
    TokenType.REDIR_OUT: ">",
    TokenType.REDIR_APPEND: ">>",
    TokenType.REDIR_HEREDOC: "<<",
}


class NodeType(Enum):
    """Kinds of syntax tree node."""

    COMMAND = 0
    PIPE = 1
    AND = 2
    OR = 3


_OPERATOR_LABELS = {
    NodeType.PIPE: "\033[1;31m[| PIPE]\033[0m",
    NodeType.AND: "\033[1;33m[AND]\033[0m",
    NodeType.OR: "\033[1;33m[OR]\033[0m",
}


@dataclass
class Redirection:
    """One redirection of a command: its operator kind and target file."""

    type: TokenType
    file_name: str


@dataclass
class AstNode:
    """A command (with arguments and redirections) or an operator joining two nodes."""

    type: NodeType
    left: AstNode | None = None
    right: AstNode | None = None
    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)

    @classmethod
    def command(
        cls, args: Iterable[str], redirections: Iterable[Redirection] | None = None
    ) -> AstNode:
        """Build a command node from its arguments and redirections."""
        return cls(
            NodeType.COMMAND,
            args=list(args),
            redirections=list(redirections or ()),
        )


def format_ast(node: AstNode | None, level: int = 0) -> str:
    """Render a tree for debugging, one command per line, children indented."""
    if node is None:
        return ""
    parts = [
        f" {_PURPLE}[{_REDIRECTION_SYMBOLS[r.type]} {r.file_name}]{_RESET}"
        if r.type in _REDIRECTION_SYMBOLS
        else f" {_PURPLE}{_RESET}"
        for r in node.redirections
    ]
    indent = " " * level
    parts.append(indent)
    if node.type is NodeType.COMMAND:
        name = node.args[0] if node.args else "empty"
        parts.append(f"{_GREEN}[CMD]{_RESET} {name}\n")
        return "".join(parts)
    parts.append(_OPERATOR_LABELS[node.type] + "\n")
    parts.append(f"{indent}L-> {format_ast(node.left, level + 1)}")
    parts.append(f"{indent}R-> {format_ast(node.right, level + 1)}")
    return "".join(parts)