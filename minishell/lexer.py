"""Split a command line into tokens: words, variables and operators."""

from __future__ import annotations

from collections.abc import Iterator

from .errors import LexError
from .tokens import ScanState, Token, TokenType, operator_type

BUFFER_LIMIT = 1023

_WHITESPACE = frozenset(" \t\n")
_OPERATOR_CHARS = frozenset("<>|&")
_QUOTE_STATES = {"'": ScanState.IN_SNGL_QUOTE, '"': ScanState.IN_DBL_QUOTE}
_CLOSING_QUOTE = {ScanState.IN_SNGL_QUOTE: "'", ScanState.IN_DBL_QUOTE: '"'}


def is_whitespace(char: str) -> bool:
    """Space, tab or newline."""
    return char in _WHITESPACE


def is_operator_char(char: str) -> bool:
    """A character that starts an operator: < > | &."""
    return char in _OPERATOR_CHARS


def is_name_start(char: str) -> bool:
    """An ASCII letter or underscore."""
    return char == "_" or (len(char) == 1 and char.isascii() and char.isalpha())


def _is_name_char(char: str) -> bool:
    return char == "_" or (len(char) == 1 and char.isascii() and char.isalnum())


def switch_state(current: ScanState, char: str) -> ScanState:
    """Return the quoting state after reading ``char`` in state ``current``."""
    if current is ScanState.IN_SNGL_QUOTE and char == "'":
        return ScanState.IN_DEFAULT
    if current is ScanState.IN_DBL_QUOTE and char == '"':
        return ScanState.IN_DEFAULT
    if current is ScanState.IN_ESCAPE:
        return ScanState.IN_DEFAULT
    if current is ScanState.IN_DEFAULT:
        if char == "\\":
            return ScanState.IN_ESCAPE
        if char in _QUOTE_STATES:
            return _QUOTE_STATES[char]
    return current


def chop_word(state: ScanState, char: str) -> bool:
    """Tell whether ``char`` ends a word when read in ``state``."""
    return state is ScanState.IN_DEFAULT and (is_whitespace(char) or is_operator_char(char))


class Scanner:
    """Reads tokens one at a time from a command line."""

    def __init__(self, text: str) -> None:
        self.text = text.split("\0", 1)[0]
        self.pos = 0
        self._buffer: list[str] = []

    def __iter__(self) -> Iterator[Token]:
        while (token := self.next_token()) is not None:
            yield token

    def peek(self) -> str:
        """The current character, or an empty string at the end."""
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def peek_next(self) -> str:
        """The character after the current one, or an empty string."""
        return self.text[self.pos + 1] if self.pos + 1 < len(self.text) else ""

    def advance(self) -> None:
        """Move past the current character."""
        self.pos += 1

    def next_token(self) -> Token | None:
        """Scan the next token; None once the input is used up."""
        while is_whitespace(self.peek()):
            self.advance()
        char = self.peek()
        if not char:
            return None
        if is_operator_char(char):
            return self.scan_operator()
        if char == "$":
            return self.scan_var()
        return self.scan_word()

    def _append(self, char: str) -> None:
        if len(self._buffer) < BUFFER_LIMIT:
            self._buffer.append(char)

    def _take(self, kind: TokenType) -> Token:
        return Token(kind, "".join(self._buffer))

    def _consume_quote(self, state: ScanState, char: str) -> ScanState | None:
        if state is ScanState.IN_DEFAULT:
            new_state = _QUOTE_STATES.get(char)
        elif _CLOSING_QUOTE.get(state) == char:
            new_state = ScanState.IN_DEFAULT
        else:
            new_state = None
        if new_state is not None:
            self.advance()
        return new_state

    def scan_word(self) -> Token:
        """Scan a word, joining quoted parts and dropping the quotes."""
        self._buffer.clear()
        state = ScanState.IN_DEFAULT
        while char := self.peek():
            if chop_word(state, char):
                break
            new_state = self._consume_quote(state, char)
            if new_state is not None:
                state = new_state
                continue
            self._append(char)
            self.advance()
        if state in _CLOSING_QUOTE:
            raise LexError("Unclosed quote.")
        return self._take(TokenType.WORD)

    def scan_operator(self) -> Token:
        """Scan a one- or two-character operator."""
        self._buffer.clear()
        char = self.peek()
        self._append(char)
        self.advance()
        if self.peek() == char:
            self._append(char)
            self.advance()
        lexeme = "".join(self._buffer)
        try:
            kind = operator_type(lexeme)
        except ValueError:
            raise LexError("Unknown operator") from None
        return Token(kind, lexeme)

    def scan_var(self) -> Token:
        """Scan a ``$`` reference together with the name that follows it."""
        self._buffer.clear()
        self._append(self.peek())
        self.advance()
        if self.peek() == "?":
            self._append("?")
            self.advance()
        following = self.peek()
        if not following or is_whitespace(following) or is_operator_char(following):
            return self._take(TokenType.VAR)
        while _is_name_char(self.peek()):
            self._append(self.peek())
            self.advance()
        return self._take(TokenType.VAR)


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens ending with an EOF token; raise LexError on bad input."""
    tokens = list(Scanner(text))
    tokens.append(Token(TokenType.EOF))
    return tokens