"""Boundary types for handing buffer state to render hosts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple

from .state import Cursor

Range = Tuple[Cursor, Cursor]


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Immutable snapshot a host renders after each processed key.

    ``selection`` is the normalized Visual range with an inclusive end;
    ``pending`` is the half-open range awaiting delete confirmation.
    """

    lines: Tuple[str, ...]
    cursor: Cursor
    selection: Optional[Range] = None
    pending: Optional[Range] = None
    mode: str = "normal"
    mode_label: str = "NORMAL"
    dirty: bool = False
    version: int = 0
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class BufferSync(Protocol):
    """How adapters pull render state from the engine."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest settled snapshot."""
        ...


__all__ = ["BufferMirror", "BufferSync", "Range"]
