# tedit/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
from types import TracebackType
from typing import Optional


class TerminalAppMode:
    """
    Put the terminal into the state the editor needs for a session:

    - Alternate screen buffer (smcup/rmcup) so the shell contents come back on exit.
    - Application cursor keys (smkx/rmkx) so arrows reach the editor.
    - raw + noecho (cbreak fallback) and keypad(True), so Ctrl+C and Ctrl+S
      arrive as plain key codes instead of signals or flow control.

    Usable as a context manager; `exit()` is idempotent and runs on every path
    out of the ``with`` block, including exceptions.
    """

    def __init__(self, stdscr: curses.window) -> None:
        self._entered: bool = False
        self._stdscr: curses.window = stdscr

    def __enter__(self) -> "TerminalAppMode":
        self.enter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.exit()

    @property
    def entered(self) -> bool:
        return self._entered

    def enter(self) -> None:
        stdscr = self._stdscr

        # Terminfo must be initialized before tigetstr().
        try:
            curses.setupterm()
        except curses.error as e:
            logging.debug("setupterm() failed or not required: %r", e)

        self._tputs("smcup")
        self._tputs("smkx")

        try:
            curses.raw()
        except curses.error:
            curses.cbreak()
        curses.noecho()

        stdscr.keypad(True)

        # Arrow keys sent as raw ESC sequences must not be split by a long delay.
        try:
            curses.set_escdelay(35)
        except curses.error:
            pass

        try:
            curses.curs_set(1)
        except curses.error:
            logging.debug("TerminalAppMode: terminal cannot change cursor visibility.")

        stdscr.scrollok(False)
        stdscr.leaveok(False)
        stdscr.clearok(True)
        stdscr.erase()
        stdscr.refresh()

        self._entered = True
        logging.debug("TerminalAppMode: entered (alternate screen + app cursor keys).")

    def exit(self) -> None:
        if not self._entered:
            return

        try:
            self._stdscr.keypad(False)
        except curses.error:
            pass

        try:
            curses.noraw()
        except curses.error:
            try:
                curses.nocbreak()
            except curses.error:
                pass
        try:
            curses.echo()
        except curses.error:
            pass

        self._tputs("rmkx")
        self._tputs("rmcup")

        self._entered = False
        logging.debug("TerminalAppMode: exited (restored terminal modes).")

    # ── helpers ───────────────────────────────────────────────────────────────

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Missing capability (linux console, dumb terminals).
            logging.debug("tputs(%s) skipped: %r", capname, e)
