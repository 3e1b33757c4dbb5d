# tedit/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen paints the tedit editor onto a curses window.

Each frame is drawn from scratch:
- erase the window,
- lay out the buffer with `Layout.render_frame` and write every screen row at
  its own row (never relying on the terminal's automatic wrap),
- draw the status bar on the bottom row,
- move the hardware cursor to the cell computed by the layout,
- flush with `noutrefresh()` + `curses.doupdate()`.
"""

import curses
import logging
import os
from typing import TYPE_CHECKING, Optional

from tedit.ui.Layout import Frame, render_frame, string_width, truncate_to_width

if TYPE_CHECKING:
    from tedit.core.Tedit import Tedit


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Renders the text area and the status bar of a `Tedit` instance.

    Attributes:
        STATUS_PAIR (int): Curses color pair number used for the status bar.
        editor (Tedit): Reference to the editor being drawn.
        stdscr (curses.window): The main curses window object.
        colors (dict[str, int]): Attribute for each painted element.
        last_frame (Frame | None): The most recently painted frame.
    """

    STATUS_PAIR = 1

    def __init__(self, editor: "Tedit") -> None:
        self.editor = editor
        self.stdscr = editor.stdscr
        self.colors: dict[str, int] = {}
        self.last_frame: Optional[Frame] = None
        self._last_cursor: Optional[tuple[int, int]] = None

        self._init_status_colors()

    def _init_status_colors(self) -> None:
        """Black on white for the status bar where colors exist, reverse video otherwise."""
        self.colors["status"] = curses.A_REVERSE
        try:
            if not curses.has_colors():
                return
            curses.init_pair(self.STATUS_PAIR, curses.COLOR_BLACK, curses.COLOR_WHITE)
        except curses.error as exc:
            logging.warning("init_pair failed (%s), falling back to A_REVERSE", exc)
            return
        self.colors["status"] = curses.color_pair(self.STATUS_PAIR)

    def draw(self) -> None:
        """The main screen drawing method."""
        try:
            height, width = self.stdscr.getmaxyx()
            text_rows = self.editor.get_viewport_height()

            self.stdscr.erase()

            frame = render_frame(
                self.editor.buffer.lines,
                self.editor.scroller.first_visible_row,
                self.editor.cursor.as_tuple(),
                text_rows,
                width,
            )
            self.last_frame = frame

            self._draw_text(frame)
            if text_rows < height:
                self._draw_status_bar(height - 1, width)
            self._position_cursor(frame, text_rows, width)
            self._update_display()

        except curses.error as e:
            logging.error(f"Curses error in DrawScreen.draw(): {e}", exc_info=True)

    def _draw_text(self, frame: Frame) -> None:
        for y, row_text in enumerate(frame.rows):
            if not row_text:
                continue
            try:
                self.stdscr.addstr(y, 0, row_text)
            except curses.error as e:
                logging.debug(f"DrawScreen: addstr failed on row {y}: {e}")

    def status_text(self) -> str:
        """Compose the status bar contents (without padding)."""
        filename = self.editor.filename
        name = os.path.basename(filename) if filename else "[No Name]"
        marker = " [+]" if self.editor.modified else ""
        row, column = self.editor.cursor.as_tuple()
        text = f" {name}{marker} | Ln {row + 1}, Col {column + 1}"
        if self.editor.status_message:
            text += f" | {self.editor.status_message}"
        return text

    def _draw_status_bar(self, y: int, width: int) -> None:
        """Single-line status bar at row *y*, padded to the window width.

        The last cell of the bottom row is left untouched: curses raises when
        a write ends there.
        """
        if width <= 1:
            return
        line = truncate_to_width(self.status_text(), width - 1)
        line += " " * (width - 1 - string_width(line))
        try:
            self.stdscr.addstr(y, 0, line, self.colors["status"])
        except curses.error as e:
            logging.debug(f"DrawScreen: status bar not drawn: {e}")

    def _position_cursor(self, frame: Frame, text_rows: int, width: int) -> None:
        """Moves the hardware cursor to the frame's cursor cell.

        When the layout did not reach the cursor, the previous frame's cell is
        reused so the cursor stays where it was.
        """
        target = frame.cursor if frame.cursor is not None else self._last_cursor
        if target is None or text_rows <= 0 or width <= 0:
            return

        y = min(target[0], text_rows - 1)
        x = min(target[1], width - 1)
        try:
            self.stdscr.move(y, x)
            self._last_cursor = (y, x)
        except curses.error as e:
            logging.warning(f"Curses error positioning cursor at ({y}, {x}): {e}")

    def _update_display(self) -> None:
        """Physically updates the terminal with curses double-buffering."""
        try:
            self.stdscr.noutrefresh()
            curses.doupdate()
        except curses.error as e:
            logging.error(f"Curses doupdate error: {e}")
