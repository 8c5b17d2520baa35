"""diurne: tag financial transfers, filter them with a small expression language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from diurne.tokens import Token

__version__ = "0.1.0"


def tokenize(source: str) -> list[Token]:
    """Tokenize a filter expression such as ``store:*.coffee``."""
    from diurne.lexer import tokenize as _tokenize

    return _tokenize(source)
