"""Cursor motions and Visual selection ranges over a :class:`Buffer`."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from notevim.buffer import Buffer
from notevim.buffer.state import Cursor

from .words import backward_word_boundary, forward_word_boundary

Range = Tuple[Cursor, Cursor]


class Motion(str, Enum):
    CHAR_LEFT = "char_left"
    CHAR_RIGHT = "char_right"
    LINE_UP = "line_up"
    LINE_DOWN = "line_down"
    LINE_START = "line_start"
    LINE_END = "line_end"
    WORD_FORWARD = "word_forward"
    WORD_BACKWARD = "word_backward"
    DOCUMENT_START = "document_start"
    DOCUMENT_END = "document_end"

    @property
    def vertical(self) -> bool:
        return self in (Motion.LINE_UP, Motion.LINE_DOWN)


def _step(buffer: Buffer, cursor: Cursor, motion: Motion) -> Cursor:
    row, col = cursor
    document = buffer.document
    if motion is Motion.CHAR_LEFT:
        return (row, max(0, col - 1))
    if motion is Motion.CHAR_RIGHT:
        return (row, min(document.line_length(row), col + 1))
    if motion.vertical:
        target = row - 1 if motion is Motion.LINE_UP else row + 1
        if not 0 <= target < document.line_count:
            return cursor
        preferred = buffer.state.preferred_col
        wanted = col if preferred is None else preferred
        return (target, min(wanted, document.line_length(target)))
    if motion is Motion.LINE_START:
        return (row, 0)
    if motion is Motion.LINE_END:
        return (row, document.line_length(row))
    if motion is Motion.WORD_FORWARD:
        return forward_word_boundary(buffer, cursor)
    if motion is Motion.WORD_BACKWARD:
        return backward_word_boundary(buffer, cursor)
    if motion is Motion.DOCUMENT_START:
        return (0, 0)
    return document.end_position()


def clamp_cursor(buffer: Buffer) -> Cursor:
    """Pull the cursor back inside the document and return it."""

    return buffer.set_cursor(*buffer.state.cursor, keep_preferred=True)


def move_by(buffer: Buffer, motion: Motion, count: int = 1) -> Cursor:
    """Move the cursor ``count`` times; every motion clamps instead of failing.

    Vertical motions leave the preferred column untouched so a run of
    ``j``/``k`` across short lines lands back on the original column.
    """

    cursor = buffer.state.cursor
    if motion.vertical and buffer.state.preferred_col is None:
        buffer.state.preferred_col = cursor[1]
    for _ in range(max(1, count)):
        following = _step(buffer, cursor, motion)
        if following == cursor:
            break
        cursor = following
    return buffer.set_cursor(*cursor, keep_preferred=motion.vertical)


def extend_selection(buffer: Buffer, motion: Motion, count: int = 1) -> Range:
    """``move_by`` that anchors a selection at the pre-move cursor if needed."""

    if not buffer.state.has_selection:
        buffer.state.start_selection()
    move_by(buffer, motion, count)
    selection = buffer.state.selection
    assert selection is not None
    return selection


def normalized_range(buffer: Buffer) -> Optional[Range]:
    """Active selection as ``(start, end)`` in document order, both inclusive."""

    selection = buffer.state.selection
    if selection is None:
        return None
    anchor, cursor = selection
    if cursor < anchor:
        return (cursor, anchor)
    return (anchor, cursor)


def selection_bounds(buffer: Buffer) -> Optional[Range]:
    """Half-open buffer range covered by the inclusive Visual selection.

    An inclusive end past the last character of its line takes the line
    break with it when another line follows.
    """

    span = normalized_range(buffer)
    if span is None:
        return None
    start, (row, col) = span
    document = buffer.document
    if col < document.line_length(row):
        return (start, (row, col + 1))
    if row + 1 < document.line_count:
        return (start, (row + 1, 0))
    return (start, (row, document.line_length(row)))


__all__ = [
    "Motion",
    "Range",
    "clamp_cursor",
    "move_by",
    "extend_selection",
    "normalized_range",
    "selection_bounds",
]
