# tests/conftest.py
"""Pytest configuration with shared fixtures for the tedit editor tests.

The editor is constructed against a `MagicMock` stdscr, so no real terminal is
needed. Curses calls that require `initscr()` fail with `curses.error`, which
the editor already tolerates; tests that assert on painting patch the module
level `curses` of the component under test.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Callable, Generator
from unittest.mock import MagicMock, patch

import pytest

from tedit.core.Cursor import Cursor
from tedit.core.Tedit import Tedit
from tedit.core.TextBuffer import TextBuffer
from tedit.utils.utils import DEFAULT_CONFIG


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr.

    Returns:
        MagicMock: A mocked `stdscr` with terminal size set to (24, 80).
    """
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)  # Typical terminal size
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Provide the embedded default configuration (a private copy)."""
    return copy.deepcopy(DEFAULT_CONFIG)


# --- Tedit fixtures ---
@pytest.fixture
def real_editor(
    mock_stdscr: MagicMock, mock_config: dict[str, Any]
) -> Generator[Tedit, None, None]:
    """Create a real `Tedit` instance over the mocked window.

    `curses.doupdate` is patched so drawing does not need an initialized screen.
    """
    with patch("tedit.ui.DrawScreen.curses.doupdate"):
        editor = Tedit(mock_stdscr, mock_config)
        yield editor


@pytest.fixture
def make_editor(real_editor: Tedit) -> Callable[..., Tedit]:
    """Factory: load *lines* into the editor and place the cursor.

    Example:
        editor = make_editor(["abc"], cursor=(0, 3))
    """

    def _make(lines: list[str], cursor: tuple[int, int] = (0, 0)) -> Tedit:
        real_editor.buffer = TextBuffer.from_lines(lines)
        real_editor.cursor = Cursor(*cursor)
        return real_editor

    return _make


# --- Helper fixtures ---
@pytest.fixture
def sample_text() -> list[str]:
    """Provide a few lines of mixed-width text."""
    return [
        "first line",
        "second",
        "",
        "日本語 text",
    ]


@pytest.fixture
def sample_file(tmp_path: Path, sample_text: list[str]) -> Path:
    """Write `sample_text` to a file in the temporary directory."""
    path = tmp_path / "sample.txt"
    path.write_text("".join(f"{line}\n" for line in sample_text), encoding="utf-8")
    return path
