"""Error types with formatted source context."""

from __future__ import annotations

import re

_ALIASES_HEADER = re.compile(r"^[ \t]*\[[ \t]*aliases[ \t]*\]", re.MULTILINE)


class ConfigError(Exception):
    """Raised when a config file cannot be read, decoded or validated.

    ``line`` and ``column`` are 0-based and only set when the problem could
    be pinned to a place in ``source``.
    """

    def __init__(
        self,
        message: str,
        filename: str,
        source: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.message = message
        self.filename = filename
        self.source = source
        self.line = line
        self.column = column
        super().__init__(message)

    def format(self) -> str:
        result = f"error: {self.message}"
        if self.__cause__ is not None:
            result += f"\n  caused by: {self.__cause__}"
        if self.source is None or self.line is None or self.column is None:
            return f"{result}\n  --> {self.filename}"

        lines = self.source.splitlines()
        if 0 <= self.line < len(lines):
            source_line = lines[self.line]
        else:
            source_line = ""

        line_num = str(self.line + 1)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        pad = " " * self.column
        carets = "^" * self._underline_len(source_line)

        return (
            f"{result}\n"
            f"{' ' * gutter_width}--> {self.filename}:{self.line + 1}:{self.column + 1}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )

    def _underline_len(self, source_line: str) -> int:
        return 1

    def __str__(self) -> str:
        # __cause__ is only attached after __init__, so format lazily
        return self.format()


class UnknownTagError(ConfigError):
    """An alias refers to a tag that is not declared in the tag list."""

    def __init__(
        self,
        name: str,
        alias: str,
        filename: str,
        source: str | None = None,
    ) -> None:
        self.name = name
        self.alias = alias
        if source is not None:
            line, column = locate_alias_member(source, alias, name)
        else:
            line, column = None, None
        super().__init__(
            f"An unknown tag have been found: {name}.", filename, source, line, column
        )

    def _underline_len(self, source_line: str) -> int:
        # the quoted name
        return max(1, min(len(self.name) + 2, len(source_line) - (self.column or 0)))


class StorageError(Exception):
    """Raised when the report database cannot be opened or updated."""

    def __init__(self, message: str, filename: str) -> None:
        self.message = message
        self.filename = filename
        super().__init__(message)

    def format(self) -> str:
        result = f"error: {self.message}\n  --> {self.filename}"
        if self.__cause__ is not None:
            result += f"\n  caused by: {self.__cause__}"
        return result

    def __str__(self) -> str:
        return self.format()


def locate_alias_member(source: str, alias: str, name: str) -> tuple[int | None, int | None]:
    """Find where *alias* lists *name* in TOML *source*.

    The search starts after the ``alias =`` entry of the ``[aliases]`` table
    and skips comment lines. Returns the 0-based (line, column) of the
    opening quote, or (None, None).
    """
    key = re.escape(alias)
    entry = re.compile(
        rf"^[ \t]*(?:aliases[ \t]*\.[ \t]*)?(?:{key}|\"{key}\"|'{key}')[ \t]*=", re.MULTILINE
    )
    header = _ALIASES_HEADER.search(source)
    start = header.end() if header is not None else 0
    match = entry.search(source, start)
    if match is not None:
        start = match.end()

    idx = _find_quoted(source, name, start)
    if idx is None:
        return None, None
    line_start = source.rfind("\n", 0, idx) + 1
    return source.count("\n", 0, idx), idx - line_start


def _find_quoted(source: str, value: str, start: int) -> int | None:
    """Index of the first quoted *value* at or after *start*, outside comment lines."""
    pattern = re.compile(rf"\"{re.escape(value)}\"|'{re.escape(value)}'")
    for match in pattern.finditer(source, start):
        idx = match.start()
        line_start = source.rfind("\n", 0, idx) + 1
        if not source[line_start:idx].lstrip().startswith("#"):
            return idx
    return None
