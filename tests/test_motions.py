from __future__ import annotations

import pytest

from notevim.buffer import Buffer
from notevim.motions import (
    CharClass,
    Motion,
    backward_word_boundary,
    char_class,
    clamp_cursor,
    extend_selection,
    forward_word_boundary,
    move_by,
    normalized_range,
    selection_bounds,
    word_end_forward,
)


def test_char_class() -> None:
    assert char_class("a") is CharClass.WORD
    assert char_class("_") is CharClass.WORD
    assert char_class("7") is CharClass.WORD
    assert char_class(" ") is CharClass.SPACE
    assert char_class("#") is CharClass.PUNCTUATION


@pytest.mark.parametrize(
    ("text", "start", "expected"),
    [
        ("hello world", (0, 0), (0, 6)),
        ("hello world", (0, 6), (0, 11)),
        ("foo.bar baz", (0, 0), (0, 3)),
        ("foo.bar baz", (0, 3), (0, 4)),
        ("end\n  next", (0, 1), (1, 2)),
        ("end\n\nnext", (0, 0), (1, 0)),
    ],
)
def test_forward_word_boundary(text: str, start: tuple, expected: tuple) -> None:
    buffer = Buffer.from_text(text)

    assert forward_word_boundary(buffer, start) == expected


@pytest.mark.parametrize(
    ("text", "start", "expected"),
    [
        ("hello world", (0, 8), (0, 6)),
        ("hello world", (0, 6), (0, 0)),
        ("foo.bar", (0, 4), (0, 3)),
        ("one\n  two", (1, 2), (0, 0)),
        ("one\n\ntwo", (2, 0), (1, 0)),
        ("abc", (0, 0), (0, 0)),
    ],
)
def test_backward_word_boundary(text: str, start: tuple, expected: tuple) -> None:
    buffer = Buffer.from_text(text)

    assert backward_word_boundary(buffer, start) == expected


def test_word_end_forward_excludes_trailing_space() -> None:
    buffer = Buffer.from_text("hello world")

    assert word_end_forward(buffer, (0, 0)) == (0, 5)
    assert word_end_forward(buffer, (0, 5)) == (0, 11)
    assert word_end_forward(buffer, (0, 11)) == (0, 11)


def test_word_forward_then_backward_does_not_pass_start() -> None:
    buffer = Buffer.from_text("alpha beta, gamma\ndelta")
    for col in range(len("alpha beta, gamma")):
        start = (0, col)
        back = backward_word_boundary(buffer, forward_word_boundary(buffer, start))
        assert back <= start


def test_move_by_clamps_at_edges() -> None:
    buffer = Buffer.from_text("ab\ncd")

    assert move_by(buffer, Motion.CHAR_LEFT) == (0, 0)
    assert move_by(buffer, Motion.LINE_UP) == (0, 0)
    assert move_by(buffer, Motion.CHAR_RIGHT, 10) == (0, 2)
    assert move_by(buffer, Motion.LINE_DOWN, 5) == (1, 2)
    assert move_by(buffer, Motion.DOCUMENT_START) == (0, 0)
    assert move_by(buffer, Motion.DOCUMENT_END) == (1, 2)


def test_vertical_motion_keeps_preferred_column() -> None:
    buffer = Buffer.from_text("long line\nab\nanother line")
    buffer.set_cursor(0, 7)

    assert move_by(buffer, Motion.LINE_DOWN) == (1, 2)
    assert move_by(buffer, Motion.LINE_DOWN) == (2, 7)

    move_by(buffer, Motion.CHAR_LEFT)
    assert buffer.state.preferred_col == 6


def test_line_start_and_end() -> None:
    buffer = Buffer.from_text("  indented")
    buffer.set_cursor(0, 4)

    assert move_by(buffer, Motion.LINE_END) == (0, 10)
    assert move_by(buffer, Motion.LINE_START) == (0, 0)


def test_clamp_cursor_after_document_shrinks() -> None:
    buffer = Buffer.from_text("abc\ndef")
    buffer.set_cursor(1, 3)
    buffer.document.restore(["a"])

    assert clamp_cursor(buffer) == (0, 1)


def test_selection_is_inclusive_in_document_order() -> None:
    buffer = Buffer.from_text("hello world")
    buffer.set_cursor(0, 5)
    buffer.state.start_selection()

    extend_selection(buffer, Motion.CHAR_LEFT, 3)

    assert buffer.state.selection == ((0, 5), (0, 2))
    assert normalized_range(buffer) == ((0, 2), (0, 5))
    assert selection_bounds(buffer) == ((0, 2), (0, 6))
    assert buffer.get_text_range(*selection_bounds(buffer)) == "llo "


def test_selection_bounds_takes_line_break_at_line_end() -> None:
    buffer = Buffer.from_text("ab\ncd")
    buffer.set_cursor(0, 1)
    buffer.state.start_selection()
    move_by(buffer, Motion.LINE_END)

    assert selection_bounds(buffer) == ((0, 1), (1, 0))


def test_selection_bounds_none_without_selection() -> None:
    buffer = Buffer.from_text("abc")

    assert normalized_range(buffer) is None
    assert selection_bounds(buffer) is None
