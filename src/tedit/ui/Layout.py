# tedit/ui/Layout.py
"""Layout.py
========================
Soft-wrap layout of the text buffer into terminal screen rows.

This module is the pure half of the renderer: it never touches curses. Given
the buffer lines, the first visible row, the logical cursor and the terminal
size it produces a `Frame`, i.e. the text of every screen row plus the screen
cell that corresponds to the logical cursor. `DrawScreen` then paints the frame.

Wrapping rules:
- A character occupies its display width as reported by `wcwidth`; characters
  whose width is undefined (control characters) count as 0 and do not advance.
- A row break is forced before a character when ``col + width >= cols``, so the
  last terminal column is never written.
- A row break separates consecutive logical lines; no break follows the last
  rendered line.
- Layout stops as soon as ``rows`` screen rows have been emitted, even in the
  middle of a logical line.

The cursor cell is recorded during the same scan, at every logical position
including "after the last character", so content and cursor never diverge.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import Optional, Sequence

from wcwidth import wcwidth


def char_width(ch: str) -> int:
    """Return the display width of *ch*: 0, 1 or 2 terminal cells.

    `wcwidth` reports -1 for characters without a defined width; those are
    treated as zero-width.
    """
    return max(wcwidth(ch), 0)


def string_width(text: str) -> int:
    """Sum of `char_width` over *text*."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(char_width(ch) for ch in text)


def truncate_to_width(text: str, max_width: int) -> str:
    """Clip *text* to at most *max_width* cells without splitting a wide glyph."""
    out: list[str] = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > max_width:
            break
        out.append(ch)
        used += w
    return "".join(out)


@dataclass(slots=True)
class Frame:
    """Result of a layout pass.

    Attributes:
        rows: Text of each emitted screen row, top to bottom.
        cursor: 0-based ``(screen_row, screen_col)`` of the logical cursor, or
            None if the cursor position was not reached by the scan.
    """

    rows: list[str] = field(default_factory=list)
    cursor: Optional[tuple[int, int]] = None


def render_frame(
    lines: Sequence[str],
    first_visible_row: int,
    cursor: tuple[int, int],
    rows: int,
    cols: int,
) -> Frame:
    """Lay out *lines* from *first_visible_row* onto a ``rows`` x ``cols`` screen.

    Args:
        lines: Buffer lines.
        first_visible_row: Index of the first logical line to draw.
        cursor: Logical ``(row, column)`` cursor.
        rows: Screen rows available for content.
        cols: Terminal width in cells.

    Returns:
        Frame: Screen rows and the screen cell of the cursor.
    """
    frame = Frame()
    if rows <= 0:
        return frame

    current: list[str] = []
    screen_row = 0
    screen_col = 0
    truncated = False

    for i in range(first_visible_row, len(lines)):
        line = lines[i]
        for j in range(len(line) + 1):
            if (i, j) == cursor:
                frame.cursor = (screen_row, screen_col)

            if j == len(line):
                break

            ch = line[j]
            width = char_width(ch)
            if screen_col + width >= cols:
                frame.rows.append("".join(current))
                current = []
                screen_row += 1
                screen_col = 0
                if screen_row >= rows:
                    truncated = True
                    break
            # zero-width control characters take no cell and are not emitted
            if not (width == 0 and unicodedata.category(ch) == "Cc"):
                current.append(ch)
            screen_col += width

        if truncated:
            break

        frame.rows.append("".join(current))
        current = []
        screen_row += 1
        screen_col = 0
        if screen_row >= rows:
            break

    return frame
