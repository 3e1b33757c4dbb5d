# src/tedit/main.py
"""
tedit Main Entry Point
======================

Launches the tedit editor:
1) Configuration & Logging: loads config and initializes logging first.
2) CLI Path: resolves the optional file argument (``~`` expanded).
3) Curses Wrapper: initializes and tears down curses so the terminal is
   restored on every exit path.
4) Application Run: puts the terminal in application mode, instantiates
   Tedit, opens the file and starts its main loop.

Exit status is 0 after a normal quit and 1 after a fatal error.
"""

from __future__ import annotations

import curses
import locale
import logging
import signal
import sys
from pathlib import Path
from types import FrameType
from typing import Any, Optional

from tedit.core.Tedit import Tedit
from tedit.ui.TerminalAppMode import TerminalAppMode
from tedit.utils.logging_config import setup_logging
from tedit.utils.utils import load_config


logger = logging.getLogger("tedit")


def _resolve_cli_path(argv: list[str]) -> Optional[Path]:
    """
    Resolve an optional CLI path from argv[1], expanded to a user path.
    The file does NOT need to exist on disk; saving creates it.
    """
    if len(argv) <= 1:
        return None
    raw = argv[1].strip()
    if not raw:
        return None
    return Path(raw).expanduser()


def _exit_on_signal(signum: int, frame: Optional[FrameType]) -> None:
    """Turn SIGTERM/SIGHUP into SystemExit so curses and the terminal are restored."""
    logger.warning("Received signal %d, shutting down.", signum)
    raise SystemExit(128 + signum)


def _install_signal_handlers() -> None:
    for name in ("SIGTERM", "SIGHUP"):
        if hasattr(signal, name):
            signal.signal(getattr(signal, name), _exit_on_signal)
    # Ignore terminal suspension (Ctrl+Z), typical for full-screen TUIs.
    if hasattr(signal, "SIGTSTP"):
        signal.signal(signal.SIGTSTP, signal.SIG_IGN)


def main_app_runner(
    stdscr: curses.window, config: dict[str, Any], file_to_open: Optional[Path]
) -> None:
    """
    Target for `curses.wrapper`. Runs one editing session.

    Args:
        stdscr: Curses standard screen window provided by wrapper.
        config: Application configuration dict.
        file_to_open: Optional CLI path (may or may not exist on disk).
    """
    _install_signal_handlers()

    with TerminalAppMode(stdscr):
        editor = Tedit(stdscr, config=config)
        if file_to_open is not None:
            editor.open_file(str(file_to_open))
        editor.run()


def start(argv: Optional[list[str]] = None) -> None:
    """
    Loads configuration, sets up logging and runs the editor under
    `curses.wrapper`. Exits the process with status 1 on fatal errors.
    """
    if argv is None:
        argv = sys.argv

    try:
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        # Logging is not ready; print to stderr and exit.
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("tedit editor starting up...")

    # Locale is important for proper character width/encoding behavior in curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = _resolve_cli_path(argv)

    try:
        curses.wrapper(main_app_runner, config, file_to_open)
        logger.info("tedit editor shut down gracefully.")
    except Exception as e:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        print(f"tedit: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    start()
