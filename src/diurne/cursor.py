"""Character cursor with line, column and byte-offset bookkeeping."""

from __future__ import annotations

from diurne.tokens import is_break


class Cursor:
    """Walk a source string one character at a time.

    ``offset`` counts UTF-8 bytes, ``index`` counts characters. ``line`` and
    ``column`` are 0-based; a CRLF pair is one line break, and so is a lone
    CR.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._index = 0
        self._offset = 0
        self._line = 0
        self._col = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def index(self) -> int:
        return self._index

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._col

    def at_end(self) -> bool:
        return self._index >= len(self._source)

    def peek(self) -> str | None:
        """Return the next character without consuming it, or None at end."""
        if self._index < len(self._source):
            return self._source[self._index]
        return None

    def advance(self) -> str | None:
        """Consume the next character and return the consumed text.

        Returns ``"\\r\\n"`` when a CRLF pair is consumed as one break, and
        None at end of input.
        """
        ch = self._bump()
        if ch is None:
            return None

        if not is_break(ch):
            self._col += 1
            return ch

        if ch == "\r" and self.peek() == "\n":
            self._bump()
            ch = "\r\n"

        self._line += 1
        self._col = 0
        return ch

    def _bump(self) -> str | None:
        ch = self.peek()
        if ch is None:
            return None
        self._index += 1
        self._offset += len(ch.encode("utf-8"))
        return ch
