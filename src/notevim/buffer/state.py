"""Cursor and selection state for a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Cursor = Tuple[int, int]  # (row, column)
Selection = Tuple[Cursor, Cursor]  # (anchor, cursor)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + selection info tied to a BufferDocument.

    ``preferred_col`` is the column vertical motions try to return to; it is
    reset by every horizontal move and kept across runs of ``j``/``k``.
    """

    cursor: Cursor = (0, 0)
    anchor: Optional[Cursor] = None
    preferred_col: Optional[int] = None

    @property
    def selection(self) -> Optional[Selection]:
        if self.anchor is None:
            return None
        return (self.anchor, self.cursor)

    @property
    def has_selection(self) -> bool:
        return self.anchor is not None

    def set_cursor(self, row: int, col: int, *, keep_preferred: bool = False) -> None:
        self.cursor = (row, col)
        if not keep_preferred:
            self.preferred_col = col

    def start_selection(self, anchor: Optional[Cursor] = None) -> None:
        self.anchor = anchor if anchor is not None else self.cursor

    def clear_selection(self) -> None:
        self.anchor = None

    def swap_anchor(self) -> None:
        if self.anchor is None:
            return
        self.anchor, cursor = self.cursor, self.anchor
        self.set_cursor(*cursor)
