"""Shared test fixtures and helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from diurne.lexer import tokenize
from diurne.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def write_config(tmp_path: Path):
    """Return a helper that writes a config file and returns its path."""

    def _write(text: str, name: str = "ledger.toml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def spans(tokens: list[Token]) -> list[tuple[int, int]]:
    return [(t.span.start, t.span.end) for t in tokens]
