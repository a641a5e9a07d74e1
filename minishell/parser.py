"""Recursive-descent parser turning tokens into a syntax tree."""

from __future__ import annotations

from collections.abc import Iterable

from .ast import AstNode, NodeType, Redirection
from .errors import ShellSyntaxError
from .tokens import Token, TokenType, is_redirection

_COMMAND_END = frozenset(
    {TokenType.EOF, TokenType.PIPE, TokenType.LOGIC_OR, TokenType.LOGIC_AND}
)
_ARGUMENT_TYPES = frozenset({TokenType.WORD, TokenType.STR, TokenType.VAR})
_LOGIC_NODES = {TokenType.LOGIC_OR: NodeType.OR, TokenType.LOGIC_AND: NodeType.AND}


class Parser:
    """Parses a token sequence: logic operators, then pipelines, then commands."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._pos = 0

    def peek(self) -> Token | None:
        """The current token, or None past the end."""
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def consume(self, expected: TokenType) -> Token | None:
        """Take the current token if it is of the expected type, else return None."""
        token = self.peek()
        if token is None or token.type is not expected:
            return None
        self._pos += 1
        return token

    def parse(self) -> AstNode:
        """Parse the whole input; raise ShellSyntaxError if it holds no command."""
        tree = self.parse_logic()
        if tree is None:
            raise ShellSyntaxError("ast failed")
        return tree

    def parse_logic(self) -> AstNode | None:
        """Parse pipelines joined left to right by && and ||."""
        left = self.parse_pipeline()
        if left is None:
            return None
        while (token := self.peek()) is not None and token.type in _LOGIC_NODES:
            self.consume(token.type)
            right = self.parse_pipeline()
            if right is None:
                raise ShellSyntaxError(f"missing command after '{token.lexeme}'")
            left = AstNode(_LOGIC_NODES[token.type], left, right)
        return left

    def parse_pipeline(self) -> AstNode | None:
        """Parse commands joined by |, nesting to the right."""
        left = self.parse_command()
        if left is None:
            return None
        if self.consume(TokenType.PIPE) is None:
            return left
        right = self.parse_pipeline()
        if right is None:
            raise ShellSyntaxError("missing command after '|'")
        return AstNode(NodeType.PIPE, left, right)

    def parse_command(self) -> AstNode | None:
        """Parse one command's arguments and redirections; None if it has neither."""
        args: list[str] = []
        redirections: list[Redirection] = []
        while (token := self.peek()) is not None and token.type not in _COMMAND_END:
            if is_redirection(token):
                self.parse_redirection(redirections)
                continue
            self.consume(token.type)
            if token.type in _ARGUMENT_TYPES and token.lexeme is not None:
                args.append(token.lexeme)
        if not args and not redirections:
            return None
        return AstNode.command(args, redirections)

    def parse_redirection(self, redirections: list[Redirection]) -> None:
        """Parse an operator and its target file and add it to ``redirections``."""
        operator = self.peek()
        if operator is None:
            raise ShellSyntaxError("unexpected token.")
        self.consume(operator.type)
        target = self.consume(TokenType.WORD) or self.consume(TokenType.STR)
        if target is None or target.lexeme is None:
            raise ShellSyntaxError("unexpected token.")
        redirections.append(Redirection(operator.type, target.lexeme))


def parse(tokens: Iterable[Token]) -> AstNode:
    """Parse a token sequence into a syntax tree."""
    return Parser(tokens).parse()