# tests/test_core/test_cursor_viewport.py
"""Unit tests for `Cursor` and `ViewportScroller`."""

import dataclasses

import pytest

from tedit.core import Cursor, TextBuffer, ViewportScroller


# --- Cursor ---------------------------------------------------------------------
def test_cursor_defaults_to_origin() -> None:
    assert Cursor().as_tuple() == (0, 0)


def test_cursor_is_immutable() -> None:
    cursor = Cursor(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cursor.row = 5  # type: ignore[misc]


@pytest.mark.parametrize(
    ("cursor", "expected"),
    [
        (Cursor(0, 0), (0, 0)),
        (Cursor(0, 3), (0, 3)),
        (Cursor(0, 10), (0, 3)),
        (Cursor(5, 1), (1, 0)),
        (Cursor(-1, -4), (0, 0)),
    ],
)
def test_cursor_clamp_to_buffer(cursor: Cursor, expected: tuple[int, int]) -> None:
    buf = TextBuffer.from_lines(["abc", ""])
    clamped = cursor.clamp_to(buf)
    assert clamped.as_tuple() == expected
    assert clamped.is_valid_in(buf)


def test_cursor_after_last_character_is_valid() -> None:
    buf = TextBuffer.from_lines(["abc"])
    assert Cursor(0, 3).is_valid_in(buf)
    assert not Cursor(0, 4).is_valid_in(buf)
    assert not Cursor(1, 0).is_valid_in(buf)


# --- ViewportScroller -------------------------------------------------------------
def test_viewport_scrolls_up_to_cursor() -> None:
    scroller = ViewportScroller(10)
    assert scroller.clamp(cursor_row=4, height=5) is True
    assert scroller.first_visible_row == 4


def test_viewport_scrolls_down_to_keep_cursor_on_last_row() -> None:
    scroller = ViewportScroller(0)
    assert scroller.clamp(cursor_row=7, height=5) is True
    assert scroller.first_visible_row == 3


def test_viewport_unchanged_when_cursor_visible() -> None:
    scroller = ViewportScroller(2)
    for row in range(2, 7):
        assert scroller.clamp(cursor_row=row, height=5) is False
        assert scroller.first_visible_row == 2


def test_viewport_clamp_is_idempotent() -> None:
    scroller = ViewportScroller(0)
    scroller.clamp(cursor_row=42, height=10)
    first = scroller.first_visible_row
    assert scroller.clamp(cursor_row=42, height=10) is False
    assert scroller.first_visible_row == first


def test_viewport_with_zero_height_only_scrolls_up() -> None:
    scroller = ViewportScroller(3)
    assert scroller.clamp(cursor_row=10, height=0) is False
    assert scroller.first_visible_row == 3
    scroller.clamp(cursor_row=1, height=0)
    assert scroller.first_visible_row == 1


def test_viewport_reset() -> None:
    scroller = ViewportScroller(9)
    scroller.reset()
    assert scroller.first_visible_row == 0
