# tests/ui/test_layout.py
"""Unit tests for the soft-wrap layout in `tedit.ui.Layout`.
=============================================================

`render_frame` is pure, so these tests need neither curses nor an editor.
"""

import pytest

from tedit.ui.Layout import Frame, render_frame, string_width, truncate_to_width


def test_line_wraps_before_last_column() -> None:
    frame = render_frame(["abcdefgh"], 0, (0, 0), rows=10, cols=5)
    assert frame.rows == ["abcd", "efgh"]


def test_logical_lines_start_on_new_rows() -> None:
    frame = render_frame(["ab", "", "cd"], 0, (0, 0), rows=10, cols=80)
    assert frame.rows == ["ab", "", "cd"]


def test_empty_buffer_renders_single_empty_row() -> None:
    frame = render_frame([""], 0, (0, 0), rows=5, cols=80)
    assert frame.rows == [""]
    assert frame.cursor == (0, 0)


def test_rendering_stops_at_row_limit() -> None:
    frame = render_frame(["a", "b", "c"], 0, (0, 0), rows=2, cols=80)
    assert frame.rows == ["a", "b"]


def test_rendering_stops_mid_line() -> None:
    frame = render_frame(["abcdefghij", "next"], 0, (1, 0), rows=2, cols=5)
    assert frame.rows == ["abcd", "efgh"]
    assert frame.cursor is None


def test_starts_at_first_visible_row() -> None:
    frame = render_frame(["x", "y", "z"], 1, (2, 1), rows=10, cols=80)
    assert frame.rows == ["y", "z"]
    assert frame.cursor == (1, 1)


def test_cursor_above_viewport_is_not_recorded() -> None:
    frame = render_frame(["x", "y", "z"], 1, (0, 0), rows=10, cols=80)
    assert frame.cursor is None


@pytest.mark.parametrize(
    ("cursor", "expected"),
    [
        ((0, 0), (0, 0)),
        ((0, 3), (0, 3)),
        ((0, 5), (1, 1)),
        ((0, 8), (1, 4)),
        ((1, 2), (2, 2)),
    ],
)
def test_cursor_follows_wrapped_content(cursor: tuple[int, int], expected: tuple[int, int]) -> None:
    frame = render_frame(["abcdefgh", "xyz"], 0, cursor, rows=10, cols=5)
    assert frame.rows == ["abcd", "efgh", "xyz"]
    assert frame.cursor == expected


def test_wide_characters_take_two_cells() -> None:
    frame = render_frame(["日本語"], 0, (0, 3), rows=10, cols=5)
    assert frame.rows == ["日本", "語"]
    assert frame.cursor == (1, 2)


def test_control_characters_are_zero_width_and_not_emitted() -> None:
    frame = render_frame(["a\x01b"], 0, (0, 2), rows=10, cols=80)
    assert frame.rows == ["ab"]
    assert frame.cursor == (0, 1)


def test_no_rows_gives_empty_frame() -> None:
    assert render_frame(["abc"], 0, (0, 0), rows=0, cols=80) == Frame()


def test_string_width_and_truncation() -> None:
    assert string_width("abc") == 3
    assert string_width("a日") == 3
    assert truncate_to_width("日本語", 5) == "日本"
    assert truncate_to_width("hello", 10) == "hello"
    assert truncate_to_width("hello", 0) == ""
