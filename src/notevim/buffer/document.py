"""Line-structured text storage for note buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .state import Cursor
from .validation import ensure_position


def split_lines(text: str) -> List[str]:
    """Split ``text`` on line breaks, always returning at least one line.

    ``"a\\n"`` yields ``["a", ""]`` so a trailing newline survives a
    load/save round-trip.
    """

    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


@dataclass(slots=True)
class BufferDocument:
    """Ordered list of lines with a version counter and a dirty flag.

    The document never holds zero lines and no line contains ``"\\n"``; line
    breaks exist only as list structure. Positions are ``(row, col)`` with
    ``col`` allowed to equal the line length.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=split_lines(text or ""))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_length(self, index: int) -> int:
        return len(self._lines[index])

    def is_empty(self) -> bool:
        return len(self._lines) == 1 and not self._lines[0]

    def end_position(self) -> Cursor:
        last = len(self._lines) - 1
        return (last, len(self._lines[last]))

    def insert(self, position: Cursor, text: str) -> Cursor:
        """Insert ``text`` at ``position`` and return the end of the insertion."""

        row, col = ensure_position(self, position)
        if not text:
            return (row, col)
        line = self._lines[row]
        parts = split_lines(text)
        head, tail = line[:col], line[col:]
        if len(parts) == 1:
            self._lines[row] = head + parts[0] + tail
            end = (row, col + len(parts[0]))
        else:
            new_lines = [head + parts[0], *parts[1:-1], parts[-1] + tail]
            self._lines[row : row + 1] = new_lines
            end = (row + len(parts) - 1, len(parts[-1]))
        self._touch()
        return end

    def delete(self, start: Cursor, end: Cursor) -> str:
        """Remove ``[start, end)`` and return the removed text.

        The endpoints may be passed in either order. Crossing a line break
        merges the surrounding lines.
        """

        start = ensure_position(self, start)
        end = ensure_position(self, end)
        if end < start:
            start, end = end, start
        if start == end:
            return ""
        removed = self.get_text(start, end)
        (s_row, s_col), (e_row, e_col) = start, end
        merged = self._lines[s_row][:s_col] + self._lines[e_row][e_col:]
        self._lines[s_row : e_row + 1] = [merged]
        self._touch()
        return removed

    def get_text(self, start: Cursor, end: Cursor) -> str:
        start = ensure_position(self, start)
        end = ensure_position(self, end)
        if end < start:
            start, end = end, start
        (s_row, s_col), (e_row, e_col) = start, end
        if s_row == e_row:
            return self._lines[s_row][s_col:e_col]
        pieces = [self._lines[s_row][s_col:]]
        pieces.extend(self._lines[s_row + 1 : e_row])
        pieces.append(self._lines[e_row][:e_col])
        return "\n".join(pieces)

    def insert_lines(self, index: int, lines: Iterable[str]) -> None:
        """Insert whole lines before ``index`` (``index == line_count`` appends)."""

        new_lines = list(lines)
        if not 0 <= index <= len(self._lines):
            raise IndexError(f"line index {index} out of range")
        if not new_lines:
            return
        self._lines[index:index] = new_lines
        self._touch()

    def restore(self, lines: Iterable[str]) -> None:
        """Replace every line; used by undo/redo and rollback."""

        restored = list(lines) or [""]
        self._lines = restored
        self._touch()

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True
