"""Filter expression lexer: converts source text into a lazy token stream."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from diurne.cursor import Cursor
from diurne.tokens import (
    PUNCTUATION,
    Span,
    Token,
    TokenKind,
    is_digit,
    is_ident_char,
    is_space,
)


class Lexer:
    """Tokenize a filter expression such as ``store:*.coffee``.

    Tokens are produced on demand. Every character of the input belongs to
    exactly one token, so the byte spans of the produced tokens partition the
    UTF-8 encoding of the source. Once exhausted the lexer stays exhausted;
    build a new one to tokenize the same text again.
    """

    def __init__(self, source: str) -> None:
        self._cursor = Cursor(source)

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Token | None:
        """Return the next token, or None once the input is exhausted."""
        ch = self._cursor.peek()
        if ch is None:
            return None

        kind = PUNCTUATION.get(ch)
        if kind is not None:
            return self._scan(kind, None)
        if is_space(ch):
            return self._scan(TokenKind.SPACES, is_space)
        if is_digit(ch):
            return self._scan(TokenKind.DIGITS, is_digit)
        return self._scan(TokenKind.IDENTIFIER, is_ident_char)

    def _scan(self, kind: TokenKind, cont: Callable[[str], bool] | None) -> Token:
        """Consume the current character, then every following one matching *cont*."""
        cursor = self._cursor
        line, column = cursor.line, cursor.column
        start, first = cursor.offset, cursor.index

        cursor.advance()
        if cont is not None:
            while not cursor.at_end() and cont(cursor.peek()):
                cursor.advance()

        text = cursor.source[first : cursor.index]
        return Token(kind, text, Span(line, column, start, cursor.offset))


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return list(Lexer(source))
