"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .state import Cursor

if TYPE_CHECKING:
    from .document import BufferDocument


class BufferValidationError(RuntimeError):
    """Raised when a buffer operation receives inconsistent input."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


class OutOfRange(BufferValidationError):
    """Position outside the document; only reachable through a programming error."""


def ensure_position(document: "BufferDocument", cursor: Cursor) -> Cursor:
    row, col = cursor
    if row < 0 or row >= document.line_count:
        raise OutOfRange(f"Row {row} out of range", cursor=cursor)
    if col < 0 or col > document.line_length(row):
        raise OutOfRange(f"Column {col} out of range on row {row}", cursor=cursor)
    return (row, col)


def clamp_position(document: "BufferDocument", row: int, col: int) -> Cursor:
    row = max(0, min(row, document.line_count - 1))
    col = max(0, min(col, document.line_length(row)))
    return (row, col)


__all__ = [
    "BufferValidationError",
    "OutOfRange",
    "ensure_position",
    "clamp_position",
]
