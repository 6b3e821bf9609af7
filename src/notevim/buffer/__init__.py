"""Buffer abstractions and undo/redo data structures."""

from .buffer import Buffer, Transaction
from .document import BufferDocument, split_lines
from .lists import ListPrefix
from .registers import Register, RegisterKind, RegisterValue
from .state import BufferState, Cursor, Selection
from .sync import BufferMirror, BufferSync, Range
from .undo import UndoEntry, UndoTimeline
from .validation import (
    BufferValidationError,
    OutOfRange,
    clamp_position,
    ensure_position,
)

__all__ = [
    "Buffer",
    "Transaction",
    "BufferDocument",
    "split_lines",
    "ListPrefix",
    "Register",
    "RegisterKind",
    "RegisterValue",
    "BufferState",
    "Cursor",
    "Selection",
    "BufferMirror",
    "BufferSync",
    "Range",
    "UndoEntry",
    "UndoTimeline",
    "BufferValidationError",
    "OutOfRange",
    "clamp_position",
    "ensure_position",
]
