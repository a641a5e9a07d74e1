"""Token kinds, scanner states and the token value produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of token the lexer can produce."""

    DELIMITER = 0
    WORD = 1
    STR = 2
    EXIT_STATUS = 3
    VAR = 4
    PIPE = 5
    LOGIC_OR = 6
    LOGIC_AND = 7
    REDIR_IN = 8
    REDIR_OUT = 9
    REDIR_APPEND = 10
    REDIR_HEREDOC = 11
    LPAREN = 12
    RPAREN = 13
    EOF = 14
    ERROR = 15
    BACKGROUND = 16
    WILDCARD = 17
    ENV = 18
    SINGLE_QUOTE = 19
    DOUBLE_QUOTE = 20
    MIXED_QUOTE = 21


class ScanState(Enum):
    """Quoting and context states used while scanning."""

    IN_DEFAULT = 0
    IN_SNGL_QUOTE = 1
    IN_DBL_QUOTE = 2
    IN_ESCAPE = 3
    IN_STRING = 4
    IN_HEREDOC = 5
    IN_VAR = 6
    IN_PIPE = 7
    IN_LOGICAL = 8
    NORMAL = 9


@dataclass(frozen=True)
class Token:
    """A single lexical token; ``lexeme`` is None for the end-of-input token."""

    type: TokenType
    lexeme: str | None = None


_OPERATORS = {
    "|": TokenType.PIPE,
    "<": TokenType.REDIR_IN,
    ">": TokenType.REDIR_OUT,
    "<<": TokenType.REDIR_HEREDOC,
    ">>": TokenType.REDIR_APPEND,
    "||": TokenType.LOGIC_OR,
    "&&": TokenType.LOGIC_AND,
}

_REDIRECTIONS = frozenset(
    {
        TokenType.REDIR_IN,
        TokenType.REDIR_OUT,
        TokenType.REDIR_APPEND,
        TokenType.REDIR_HEREDOC,
    }
)


def operator_type(lexeme: str) -> TokenType:
    """Return the token type of an operator lexeme; raise ValueError if unknown."""
    try:
        return _OPERATORS[lexeme]
    except KeyError:
        raise ValueError(f"unknown operator: {lexeme!r}") from None


def is_redirection(token: Token | None) -> bool:
    """Tell whether a token is one of the four redirection operators."""
    return token is not None and token.type in _REDIRECTIONS