# tests/test_main.py
"""Tests for the `tedit.main` launcher.

`curses.wrapper`, configuration and logging bootstrap are patched, so these
tests check argument handling, wiring and exit codes without a terminal.
"""

import signal
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from tedit import main
from tedit.core.Tedit import TerminalSizeError


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        ([], None),
        (["tedit"], None),
        (["tedit", "   "], None),
        (["tedit", "notes.txt"], Path("notes.txt")),
        (["tedit", "~/notes.txt"], Path.home() / "notes.txt"),
    ],
)
def test_resolve_cli_path(argv: list[str], expected: Path | None) -> None:
    assert main._resolve_cli_path(argv) == expected


def test_signal_handler_raises_system_exit() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main._exit_on_signal(signal.SIGTERM, None)
    assert exc_info.value.code == 128 + signal.SIGTERM


def test_main_app_runner_opens_file_and_runs() -> None:
    stdscr = MagicMock()
    with (
        patch("tedit.main._install_signal_handlers"),
        patch("tedit.main.TerminalAppMode") as mode_cls,
        patch("tedit.main.Tedit") as editor_cls,
    ):
        main.main_app_runner(stdscr, {"editor": {}}, Path("/tmp/file.txt"))

    mode_cls.assert_called_once_with(stdscr)
    mode_cls.return_value.__enter__.assert_called_once()
    mode_cls.return_value.__exit__.assert_called_once()
    editor_cls.assert_called_once_with(stdscr, config={"editor": {}})
    editor = editor_cls.return_value
    editor.open_file.assert_called_once_with("/tmp/file.txt")
    editor.run.assert_called_once()


def test_main_app_runner_without_file_starts_untitled() -> None:
    with (
        patch("tedit.main._install_signal_handlers"),
        patch("tedit.main.TerminalAppMode"),
        patch("tedit.main.Tedit") as editor_cls,
    ):
        main.main_app_runner(MagicMock(), {}, None)
    editor_cls.return_value.open_file.assert_not_called()
    editor_cls.return_value.run.assert_called_once()


@pytest.fixture
def bootstrap() -> Generator[MagicMock, None, None]:
    with (
        patch("tedit.main.load_config", return_value={"logging": {}}) as load,
        patch("tedit.main.setup_logging"),
    ):
        yield load


def test_start_runs_wrapper_and_exits_normally(bootstrap: MagicMock) -> None:
    with patch("tedit.main.curses.wrapper") as wrapper:
        main.start(["tedit", "doc.txt"])
    wrapper.assert_called_once_with(main.main_app_runner, {"logging": {}}, Path("doc.txt"))


def test_start_exits_with_one_on_fatal_error(bootstrap: MagicMock, capsys: pytest.CaptureFixture) -> None:
    with patch("tedit.main.curses.wrapper", side_effect=TerminalSizeError("unknown size")):
        with pytest.raises(SystemExit) as exc_info:
            main.start(["tedit"])
    assert exc_info.value.code == 1
    assert "unknown size" in capsys.readouterr().err


def test_start_exits_with_one_when_bootstrap_fails(capsys: pytest.CaptureFixture) -> None:
    with patch("tedit.main.load_config", side_effect=OSError("denied")):
        with pytest.raises(SystemExit) as exc_info:
            main.start(["tedit"])
    assert exc_info.value.code == 1
    assert "FATAL" in capsys.readouterr().err
