"""Human-readable dumps of token streams and configs."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from diurne.config import Config
from diurne.tokens import Token


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line: position, byte range, kind and text."""
    for tok in tokens:
        span = tok.span
        pos = f"{span.line}:{span.column}"
        rng = f"[{span.start},{span.end})"
        file.write(f"{pos:<8}{rng:<12}{tok.kind.name:<12}{tok.text!r}\n")


def dump_config(config: Config, *, file: TextIO = sys.stderr) -> None:
    """Print tags with their indices, then aliases with the tags they expand to."""
    file.write("Config\n")
    file.write(f"  database {config.database_path}\n")
    file.write("  tags\n")
    for i, name in enumerate(config.tags):
        file.write(f"    {i:>3} {name}\n")
    file.write("  aliases\n")
    for alias in sorted(config.aliases):
        names = ", ".join(config.tags[i] for i in config.aliases[alias])
        file.write(f"    {alias} = [{names}]\n")
