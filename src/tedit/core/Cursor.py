# tedit/core/Cursor.py
"""Logical cursor position into a `TextBuffer`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from tedit.core.TextBuffer import TextBuffer


@dataclass(frozen=True, slots=True)
class Cursor:
    """A ``(row, column)`` position.

    ``column`` may equal the line length, meaning "after the last character".
    Instances are immutable; movement produces a new cursor.
    """

    row: int = 0
    column: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.column)

    def clamp_to(self, buffer: "TextBuffer") -> "Cursor":
        """Return the nearest cursor that is valid inside *buffer*."""
        row = max(0, min(self.row, buffer.line_count - 1))
        column = max(0, min(self.column, buffer.line_length(row)))
        return Cursor(row, column)

    def is_valid_in(self, buffer: "TextBuffer") -> bool:
        return (
            0 <= self.row < buffer.line_count
            and 0 <= self.column <= buffer.line_length(self.row)
        )
