"""A small interactive shell: lexer, parser, environment, builtins and executor."""

__version__ = "0.1.0"

__all__ = [
    "ast",
    "builtins",
    "env",
    "errors",
    "executor",
    "heredoc",
    "lexer",
    "parser",
    "path",
    "shell",
    "tokens",
]