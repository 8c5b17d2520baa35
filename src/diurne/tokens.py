"""Token kinds, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    # Content (maximal runs)
    IDENTIFIER = auto()  # anything that is not punctuation, space or digit
    DIGITS = auto()  # 0-9 runs

    # Punctuation (single-character)
    COLON = auto()  # :
    STAR = auto()  # *
    DOT = auto()  # .

    # Whitespace runs, line breaks included
    SPACES = auto()


@dataclass(frozen=True, slots=True)
class Span:
    """Source location: 0-based line and column, UTF-8 byte range [start, end)."""

    line: int
    column: int
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Token:
    """A classified slice of the source text."""

    kind: TokenKind
    text: str
    span: Span


PUNCTUATION = {
    ":": TokenKind.COLON,
    "*": TokenKind.STAR,
    ".": TokenKind.DOT,
}

# \n, \r, LINE SEPARATOR, PARAGRAPH SEPARATOR
_BREAKS = frozenset("\n\r\u2028\u2029")

_IDENT_SPECIAL = frozenset("_-")

# FS, GS, RS, US: str.isspace() accepts them, Unicode White_Space does not
_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_break(ch: str) -> bool:
    """Return True if ch ends a line."""
    return ch in _BREAKS


def is_space(ch: str) -> bool:
    """Return True if ch is whitespace; the C0 separators U+001C-U+001F are not."""
    return ch.isspace() and ch not in _SEPARATORS


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return "0" <= ch <= "9"


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return ch.isalnum() or ch in _IDENT_SPECIAL
