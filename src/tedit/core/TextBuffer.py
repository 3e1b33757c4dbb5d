# tedit/core/TextBuffer.py
"""TextBuffer Module for the tedit Editor
========================================
This module provides the `TextBuffer` class, the in-memory model of the document
being edited. A buffer is an ordered list of lines; each line is a Python `str`
without embedded line breaks, so a column is simply a code-point index into it.

Key Features:
-------------
- The buffer is never empty: it always holds at least one (possibly empty) line.
- Loading splits on ``\\n``, drops the phantom line after a final terminator and
  strips trailing whitespace from every line (this also normalizes ``\\r\\n``).
- Mutations are limited to insert-char, split-line, join-line and remove-char,
  and are total over their documented domain: an out-of-range row or column is
  clamped, never rejected.
- Serialization writes exactly one ``\\n`` after every line, including the last.

Classes:
--------
- TextBuffer: line storage plus the editing primitives used by the editor core.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Iterable, Iterator


def is_control_char(char: str) -> bool:
    """Return True for C0/C1 control characters (Unicode category ``Cc``)."""
    return unicodedata.category(char) == "Cc"


## ==================== TextBuffer Class ====================
class TextBuffer:
    """Class TextBuffer
    ====================
    Ordered sequence of lines with the editing primitives of the editor core.

    Every mutating method returns ``True`` if the buffer content changed and
    ``False`` for a no-op, which lets the caller maintain a *modified* flag
    without diffing.

    Attributes:
        _lines (list[str]): Line storage. Never empty.

    Methods:
        from_text(text): Build a buffer from raw file content.
        from_lines(lines): Build a buffer from already-split lines.
        insert_char(row, column, char): Insert a character or split a line.
        remove_char_before(row, column): Backspace semantics.
        remove_char_after(row, column): Delete semantics.
        serialize(): Render the buffer back to newline-terminated text.
    """

    def __init__(self, lines: Iterable[str] | None = None) -> None:
        self._lines: list[str] = list(lines) if lines is not None else []
        if not self._lines:
            self._lines = [""]

    # ---------------- Construction ----------------
    @classmethod
    def from_text(cls, text: str) -> "TextBuffer":
        """Split *text* into lines and strip trailing whitespace from each.

        ``"a\\nb\\n"`` and ``"a\\nb"`` both load as ``["a", "b"]``; an empty
        string loads as ``[""]``.
        """
        parts = text.split("\n")
        if parts and parts[-1] == "":
            parts.pop()  # a final terminator does not open a new line
        return cls(part.rstrip() for part in parts)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "TextBuffer":
        return cls(lines)

    # ---------------- Read access ----------------
    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> tuple[str, ...]:
        """Snapshot of the current lines; mutating it does not touch the buffer."""
        return tuple(self._lines)

    def line(self, row: int) -> str:
        return self._lines[self._clamp_row(row)]

    def line_length(self, row: int) -> int:
        return len(self.line(row))

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._lines))

    def __repr__(self) -> str:
        return f"TextBuffer({self._lines!r})"

    # ---------------- Mutations ----------------
    def insert_char(self, row: int, column: int, char: str) -> bool:
        """Insert *char* at ``(row, column)``.

        A newline splits the line: the text before *column* stays on *row*, the
        rest becomes a new line right after it. Control characters are ignored.

        Args:
            row: Target line index.
            column: Insertion point, ``0 <= column <= len(line)``.
            char: A single character.

        Returns:
            bool: True if the buffer changed.
        """
        if len(char) != 1:
            logging.debug("insert_char: expected a single character, got %r", char)
            return False

        row = self._clamp_row(row)
        line = self._lines[row]
        column = self._clamp_column(line, column)

        if char == "\n":
            self._lines[row] = line[:column]
            self._lines.insert(row + 1, line[column:])
            return True

        if is_control_char(char):
            logging.debug("insert_char: ignoring control character %r", char)
            return False

        self._lines[row] = line[:column] + char + line[column:]
        return True

    def remove_char_before(self, row: int, column: int) -> bool:
        """Backspace at ``(row, column)``.

        Removes the character left of *column*; at column 0 joins *row* onto the
        end of the previous line. A no-op at the very start of the buffer.
        """
        row = self._clamp_row(row)
        line = self._lines[row]
        column = self._clamp_column(line, column)

        if column > 0:
            self._lines[row] = line[: column - 1] + line[column:]
            return True
        if row > 0:
            self._lines[row - 1] += self._lines.pop(row)
            return True
        return False

    def remove_char_after(self, row: int, column: int) -> bool:
        """Delete at ``(row, column)``.

        Removes the character under *column*; at end of line joins the next line
        onto this one. A no-op at the very end of the buffer.
        """
        row = self._clamp_row(row)
        line = self._lines[row]
        column = self._clamp_column(line, column)

        if column < len(line):
            self._lines[row] = line[:column] + line[column + 1 :]
            return True
        if row < len(self._lines) - 1:
            self._lines[row] += self._lines.pop(row + 1)
            return True
        return False

    # ---------------- Serialization ----------------
    def serialize(self) -> str:
        """Return the buffer as text with one ``\\n`` after every line."""
        return "".join(f"{line}\n" for line in self._lines)

    # ---------------- Helpers ----------------
    def _clamp_row(self, row: int) -> int:
        return max(0, min(row, len(self._lines) - 1))

    @staticmethod
    def _clamp_column(line: str, column: int) -> int:
        return max(0, min(column, len(line)))
