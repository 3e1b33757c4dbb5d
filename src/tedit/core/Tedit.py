# tedit/core/Tedit.py
"""tedit.core.Tedit.py
============================
Tedit: main module of the tedit terminal text editor.

This module defines the `Tedit` class, the controller of the editor. It owns
the editor state and implements every user-visible command:

- File operations (open at startup, save to the same path)
- Cursor navigation with the arrow keys
- Character insertion, line split (Enter), Backspace and Delete
- Vertical scrolling that keeps the cursor row on screen
- The blocking event loop: read a key, run the command, redraw

Rendering is delegated to `DrawScreen`, key decoding to `KeyBinder` and disk
access to `FileBridge`; the text itself lives in a `TextBuffer`.
"""

import curses
import logging
import os
from typing import Any, Optional

from tedit.core.Cursor import Cursor
from tedit.core.TextBuffer import TextBuffer
from tedit.core.Viewport import ViewportScroller
from tedit.integrations.FileBridge import ENCODING, FileReadError, read_lines, write_lines
from tedit.ui.DrawScreen import DrawScreen
from tedit.ui.KeyBinder import KeyBinder
from tedit.utils.logging_config import logger


class TerminalSizeError(RuntimeError):
    """Raised when the terminal dimensions cannot be determined."""


## ==================== Tedit Class ====================
class Tedit:
    """Class Tedit
    =========================
    Editor state and command implementation.

    Attributes:
        stdscr (curses.window): The main curses window.
        config (dict[str, Any]): Merged configuration.
        buffer (TextBuffer): The document being edited.
        cursor (Cursor): Logical cursor position, always valid for `buffer`.
        scroller (ViewportScroller): First visible buffer row.
        filename (str | None): Path used by save; None means save is a no-op.
        encoding (str): Encoding the file was read with; save writes it back.
        modified (bool): True if the buffer changed since the last load or save.
        status_message (str): Transient message shown in the status bar.
        running (bool): Cleared by `exit_editor` to stop `run()`.
        show_status_bar (bool): Whether the bottom row is reserved for the status bar.
        drawer (DrawScreen): Renderer.
        keybinder (KeyBinder): Input decoder and dispatcher.

    Methods:
        get_terminal_size(): Query (height, width), raising `TerminalSizeError`.
        get_viewport_height(): Rows available for text.
        open_file(path): Load a file, fail-soft.
        save_file(): Write the buffer back to `filename`.
        handle_up(), handle_down(), handle_left(), handle_right(): Navigation.
        insert_char(char), handle_backspace(), handle_delete(): Editing.
        handle_resize(): Re-clamp the viewport for the new terminal size.
        exit_editor(): Stop the main loop. No implicit save.
        run(): The main event loop.
    """

    # --- Status message ---
    def _set_status_message(self, message_for_statusbar: str) -> None:
        message_for_statusbar = str(message_for_statusbar)
        if self.status_message != message_for_statusbar:
            self.status_message = message_for_statusbar
            logging.debug(f"Status message set directly to: '{self.status_message}'")

    def clear_status_message(self) -> None:
        """Drop the transient message; called before every handled key."""
        self.status_message = ""

    # -- Initialization and Setup ---
    def __init__(
        self,
        stdscr: "curses.window",
        config: Optional[dict[str, Any]] = None,
    ) -> None:
        """Creates a `Tedit` instance with an empty, untitled buffer.

        Raises:
            TerminalSizeError: If the terminal size cannot be determined.
        """
        self.stdscr = stdscr
        self.config: dict[str, Any] = config or {}

        self.buffer = TextBuffer()
        self.cursor = Cursor()
        self.scroller = ViewportScroller()
        self.filename: Optional[str] = None
        self.encoding: str = ENCODING
        self.modified: bool = False
        self.status_message: str = ""
        self.running: bool = False
        self.show_status_bar: bool = bool(
            self.config.get("editor", {}).get("show_status_bar", True)
        )

        height, width = self.get_terminal_size()

        self.drawer = DrawScreen(self)
        self.keybinder = KeyBinder(self)

        logging.info(f"Tedit initialized successfully. Terminal {width}x{height}.")

    def get_terminal_size(self) -> tuple[int, int]:
        """Return the current ``(height, width)`` of the terminal.

        Raises:
            TerminalSizeError: On a curses error or non-positive dimensions.
        """
        try:
            height, width = self.stdscr.getmaxyx()
        except curses.error as e:
            raise TerminalSizeError(f"Cannot determine terminal size: {e}") from e
        if height <= 0 or width <= 0:
            raise TerminalSizeError(
                f"Cannot determine terminal size: got {width}x{height}"
            )
        return height, width

    def get_viewport_height(self) -> int:
        """Rows available for text; queried from the live terminal on every call."""
        height, _ = self.stdscr.getmaxyx()
        if self.show_status_bar and height >= 2:
            return height - 1
        return max(0, height)

    # --- Cursor and viewport helpers ---
    def _set_cursor(self, row: int, column: int) -> None:
        self.cursor = Cursor(row, column).clamp_to(self.buffer)

    def _clamp_scroll(self) -> bool:
        """Keep the cursor row inside the viewport. Returns True if it scrolled."""
        return self.scroller.clamp(self.cursor.row, self.get_viewport_height())

    def _finish_command(self, old_cursor: Cursor, buffer_changed: bool) -> bool:
        """Common tail of every command: flag edits, re-clamp, report change."""
        if buffer_changed:
            self.modified = True
        scrolled = self._clamp_scroll()
        return buffer_changed or scrolled or self.cursor != old_cursor

    # --- Files ---
    def open_file(self, filename_to_open: str) -> bool:
        """Loads *filename_to_open* into the buffer.

        Missing or unreadable files give an empty buffer that is still
        associated with the path, so a later save creates the file.
        """
        basename = os.path.basename(filename_to_open)
        try:
            lines, encoding = read_lines(filename_to_open)
        except FileReadError as e_read:
            lines, encoding = [""], ENCODING
            self._set_status_message(
                f"Error reading '{basename}': {e_read.strerror or e_read}"
            )
            logging.warning(f"Open file failed for '{filename_to_open}': {e_read}")
        else:
            if os.path.exists(filename_to_open):
                self._set_status_message(f"Opened {basename} ({len(lines)} lines)")
            else:
                self._set_status_message(f"New file {basename}")
            logger.info(
                "Opened '%s' with %d line(s) as %s.", filename_to_open, len(lines), encoding
            )

        self.filename = filename_to_open
        self.encoding = encoding
        self.buffer = TextBuffer.from_lines(lines)
        self.cursor = Cursor().clamp_to(self.buffer)
        self.scroller.reset()
        self.modified = False
        self._clamp_scroll()
        return True

    def save_file(self) -> bool:
        """Writes the buffer to `filename`.

        A buffer without a path is left alone. Write errors are logged and
        reported in the status bar; the session continues and the buffer stays
        marked as modified.

        Returns:
            bool: True if the status or modified flag changed.
        """
        logging.debug("save_file called")
        if not self.filename:
            logging.debug("save_file: no filename, nothing to do.")
            return False

        basename = os.path.basename(self.filename)
        try:
            self.encoding = write_lines(self.filename, self.buffer.lines, self.encoding)
        except OSError as e_write:
            self._set_status_message(f"Error saving '{basename}': {e_write.strerror or e_write}")
            logging.error(
                f"Failed to write file during Save '{self.filename}': {e_write}",
                exc_info=True,
            )
            return True

        self.modified = False
        self._set_status_message(f"Saved to {basename}")
        logger.info("Saved %d line(s) to '%s'.", self.buffer.line_count, self.filename)
        return True

    # --- Navigation ---
    def handle_up(self) -> bool:
        """Move the cursor one line up, clamping the column to the new line."""
        old_cursor = self.cursor
        if self.cursor.row > 0:
            self._set_cursor(self.cursor.row - 1, self.cursor.column)
        logging.debug("cursor ↑ %s", self.cursor.as_tuple())
        return self._finish_command(old_cursor, False)

    def handle_down(self) -> bool:
        """Move the cursor one line down, clamping the column to the new line."""
        old_cursor = self.cursor
        if self.cursor.row < self.buffer.line_count - 1:
            self._set_cursor(self.cursor.row + 1, self.cursor.column)
        logging.debug("cursor ↓ %s", self.cursor.as_tuple())
        return self._finish_command(old_cursor, False)

    def handle_left(self) -> bool:
        """Move one column left. Stops at column 0; does not wrap to the previous line."""
        old_cursor = self.cursor
        if self.cursor.column > 0:
            self._set_cursor(self.cursor.row, self.cursor.column - 1)
        return self._finish_command(old_cursor, False)

    def handle_right(self) -> bool:
        """Move one column right. Stops at end of line; does not wrap to the next line."""
        old_cursor = self.cursor
        self._set_cursor(self.cursor.row, self.cursor.column + 1)
        return self._finish_command(old_cursor, False)

    # --- Editing ---
    def insert_char(self, char: str) -> bool:
        """Insert *char* at the cursor. ``"\\n"`` splits the line."""
        old_cursor = self.cursor
        row, column = self.cursor.as_tuple()

        changed = self.buffer.insert_char(row, column, char)
        if changed:
            if char == "\n":
                self._set_cursor(row + 1, 0)
            else:
                self._set_cursor(row, column + 1)
        return self._finish_command(old_cursor, changed)

    def handle_backspace(self) -> bool:
        """Delete the character left of the cursor, or join with the previous line."""
        old_cursor = self.cursor
        row, column = self.cursor.as_tuple()

        if column == 0 and row > 0:
            join_column = self.buffer.line_length(row - 1)
            changed = self.buffer.remove_char_before(row, column)
            if changed:
                logging.debug(f"handle_backspace: merged line {row} into {row - 1}.")
                self._set_cursor(row - 1, join_column)
        else:
            changed = self.buffer.remove_char_before(row, column)
            if changed:
                self._set_cursor(row, column - 1)
        return self._finish_command(old_cursor, changed)

    def handle_delete(self) -> bool:
        """Delete the character under the cursor, or join the next line onto this one."""
        old_cursor = self.cursor
        changed = self.buffer.remove_char_after(*self.cursor.as_tuple())
        self._set_cursor(*self.cursor.as_tuple())
        return self._finish_command(old_cursor, changed)

    # --- Window and lifecycle ---
    def handle_resize(self) -> bool:
        """Re-clamp scrolling for the new terminal size. Always redraws."""
        try:
            height, width = self.stdscr.getmaxyx()
        except curses.error as e:
            logging.warning(f"handle_resize: cannot query size: {e}")
            return True
        logging.debug(f"Window resized to {width}x{height}.")
        self._clamp_scroll()
        return True

    def exit_editor(self) -> bool:
        """Signal the main loop to stop. Unsaved changes are discarded."""
        if self.modified:
            logging.info("Exiting with unsaved changes in '%s'.", self.filename)
        self.running = False
        logging.info("Main loop stop signaled.")
        return False

    def run(self) -> None:
        """The main event loop of the editor.

        Draws once, then repeats until `exit_editor` clears `running`: block on
        the next key, dispatch it, redraw. Exceptions propagate to the caller,
        which restores the terminal; Ctrl+C as a signal (terminals where raw
        mode is unavailable) ends the loop quietly.
        """
        logger.info("Editor main loop started.")
        self.running = True
        self._clamp_scroll()
        self._render_screen()

        while self.running:
            try:
                self._process_events_and_input()
            except KeyboardInterrupt:
                logger.info("Main loop interrupted by KeyboardInterrupt.")
                self.exit_editor()
                break
            if self.running:
                self._render_screen()

        logger.info("Editor main loop finished.")

    def _process_events_and_input(self) -> bool:
        """Read one key and dispatch it. Returns True if state changed."""
        key_input = self.keybinder.get_key_input()
        if key_input == curses.ERR:
            logging.debug("get_key_input returned ERR, input dropped.")
            return False
        return self.keybinder.handle_input(key_input)

    def _render_screen(self) -> None:
        self.drawer.draw()
