# tedit/core/Viewport.py
"""Vertical scrolling state: the first buffer row shown on screen."""

import logging


class ViewportScroller:
    """Tracks ``first_visible_row`` and re-clamps it around the cursor row.

    The viewport height is passed in on every call rather than stored, so a
    terminal resize is picked up by the next clamp.
    """

    def __init__(self, first_visible_row: int = 0) -> None:
        self.first_visible_row: int = max(0, first_visible_row)

    def clamp(self, cursor_row: int, height: int) -> bool:
        """Scroll just enough to keep *cursor_row* inside a window of *height* rows.

        Returns:
            bool: True if ``first_visible_row`` changed.
        """
        old = self.first_visible_row

        if cursor_row < self.first_visible_row:
            self.first_visible_row = cursor_row
        elif height > 0 and cursor_row >= self.first_visible_row + height:
            self.first_visible_row = cursor_row + 1 - height

        if self.first_visible_row != old:
            logging.debug(
                "viewport: first_visible_row %d -> %d (cursor_row=%d, height=%d)",
                old,
                self.first_visible_row,
                cursor_row,
                height,
            )
            return True
        return False

    def reset(self) -> None:
        self.first_visible_row = 0
