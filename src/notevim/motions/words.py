"""Word classification and word-boundary search.

Characters fall into three classes: word characters (letters, digits and
``_``), whitespace, and punctuation (everything else). A *word* is a maximal
run of word characters or a maximal run of punctuation; whitespace only
separates words. Word motions cross line breaks and treat an empty line as a
stop of its own.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from notevim.buffer.state import Cursor


class LineSource(Protocol):
    @property
    def line_count(self) -> int: ...

    def line(self, index: int) -> str: ...


class CharClass(Enum):
    WORD = "word"
    SPACE = "space"
    PUNCTUATION = "punctuation"


def char_class(char: str) -> CharClass:
    if char.isspace():
        return CharClass.SPACE
    if char.isalnum() or char == "_":
        return CharClass.WORD
    return CharClass.PUNCTUATION


def forward_word_boundary(buffer: LineSource, position: Cursor) -> Cursor:
    """Start of the next word after ``position``; document end if there is none."""

    row, col = position
    line = buffer.line(row)
    if col < len(line):
        kind = char_class(line[col])
        if kind is not CharClass.SPACE:
            while col < len(line) and char_class(line[col]) is kind:
                col += 1
        while col < len(line) and char_class(line[col]) is CharClass.SPACE:
            col += 1
        if col < len(line):
            return (row, col)

    while row + 1 < buffer.line_count:
        row += 1
        line = buffer.line(row)
        col = 0
        while col < len(line) and char_class(line[col]) is CharClass.SPACE:
            col += 1
        if col < len(line) or not line:
            return (row, col)
    return (row, len(line))


def backward_word_boundary(buffer: LineSource, position: Cursor) -> Cursor:
    """Start of the word under or before ``position``; ``(0, 0)`` at the top."""

    row, col = position
    line = buffer.line(row)
    col = min(col, len(line))
    while True:
        while col > 0 and char_class(line[col - 1]) is CharClass.SPACE:
            col -= 1
        if col > 0:
            kind = char_class(line[col - 1])
            while col > 0 and char_class(line[col - 1]) is kind:
                col -= 1
            return (row, col)
        if row == 0:
            return (0, 0)
        row -= 1
        line = buffer.line(row)
        col = len(line)
        if not line:
            return (row, 0)


def word_end_forward(buffer: LineSource, position: Cursor) -> Cursor:
    """Exclusive end of the word under ``position``, staying on its line.

    Leading whitespace is skipped first, so from inside a gap the result
    covers the gap plus the following word. Trailing whitespace is never
    included. Returns ``position`` unchanged at the end of a line.
    """

    row, col = position
    line = buffer.line(row)
    while col < len(line) and char_class(line[col]) is CharClass.SPACE:
        col += 1
    if col >= len(line):
        return position
    kind = char_class(line[col])
    while col < len(line) and char_class(line[col]) is kind:
        col += 1
    return (row, col)


__all__ = [
    "CharClass",
    "LineSource",
    "char_class",
    "forward_word_boundary",
    "backward_word_boundary",
    "word_end_forward",
]
