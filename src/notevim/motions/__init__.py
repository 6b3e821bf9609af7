"""Cursor motions, selection ranges and word-boundary resolution."""

from .cursor import (
    Motion,
    clamp_cursor,
    extend_selection,
    move_by,
    normalized_range,
    selection_bounds,
)
from .words import (
    CharClass,
    backward_word_boundary,
    char_class,
    forward_word_boundary,
    word_end_forward,
)

__all__ = [
    "Motion",
    "clamp_cursor",
    "move_by",
    "extend_selection",
    "normalized_range",
    "selection_bounds",
    "CharClass",
    "char_class",
    "forward_word_boundary",
    "backward_word_boundary",
    "word_end_forward",
]
