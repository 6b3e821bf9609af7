"""High-level buffer façade combining document, state, register, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Optional, Sequence, Tuple

from notevim.runtime import telemetry

from .document import BufferDocument
from .registers import Register
from .state import BufferState, Cursor
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_position


class Buffer:
    """Owns the note text plus everything that must stay in sync with it.

    All mutations run inside a :class:`Transaction`; the outermost open
    transaction records exactly one undo entry when it commits. Nested
    transactions fold into the outer one, which is how an Insert-mode session
    turns many keystrokes into a single undo step.
    """

    def __init__(
        self,
        *,
        name: str = "note",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        register: Optional[Register] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.register = register or Register()
        self.undo_timeline = undo or UndoTimeline()
        self._active: Optional[Transaction] = None
        self._clean: Tuple[str, ...] = tuple(self.document.snapshot())
        self.document.dirty = False

    @classmethod
    def from_text(cls, text: str, *, name: str = "note") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    # -- read access -------------------------------------------------
    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    @property
    def in_transaction(self) -> bool:
        return self._active is not None

    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    def line(self, index: int) -> str:
        return self.document.get_line(index)

    def text(self) -> str:
        return self.document.text()

    def is_empty(self) -> bool:
        return self.document.is_empty()

    def get_text_range(self, start: Cursor, end: Cursor) -> str:
        return self.document.get_text(start, end)

    # -- lifecycle ---------------------------------------------------
    def load(self, text: str) -> None:
        """Replace the content with freshly loaded note text.

        Loading resets history and the selection and marks the buffer clean.
        The version keeps counting so watchers see the swap as a change.
        """

        version = self.document.version
        self.document = BufferDocument.from_text(text)
        self.document.version = version + 1
        self.state = BufferState()
        self.undo_timeline.clear()
        self._active = None
        self.mark_clean()

    def mark_clean(self) -> None:
        self._clean = tuple(self.document.snapshot())
        self.document.dirty = False

    # -- cursor ------------------------------------------------------
    def set_cursor(self, row: int, col: int, *, keep_preferred: bool = False) -> Cursor:
        target = clamp_position(self.document, row, col)
        self.state.set_cursor(*target, keep_preferred=keep_preferred)
        return target

    def clamp_state(self) -> None:
        """Pull cursor and anchor back inside the document after a rewrite."""

        self.state.cursor = clamp_position(self.document, *self.state.cursor)
        if self.state.anchor is not None:
            self.state.anchor = clamp_position(self.document, *self.state.anchor)

    # -- mutation ----------------------------------------------------
    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def begin_session(self, label: str) -> "Transaction":
        """Open a long-lived transaction that the caller commits or rolls back."""

        tx = Transaction(self, label)
        tx.open()
        return tx

    def insert_text(self, text: str, *, at: Optional[Cursor] = None) -> Cursor:
        position = at if at is not None else self.state.cursor
        with self.transaction("insert_text"):
            end = self.document.insert(position, text)
            self.state.set_cursor(*end)
        return end

    def delete_range(self, start: Cursor, end: Cursor) -> str:
        if end < start:
            start, end = end, start
        with self.transaction("delete_range"):
            removed = self.document.delete(start, end)
            self.state.set_cursor(*start)
        return removed

    def insert_lines(self, index: int, lines: Iterable[str]) -> None:
        with self.transaction("insert_lines"):
            self.document.insert_lines(index, lines)

    # -- history -----------------------------------------------------
    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self._apply(entry.before, entry.cursor_before, label="undo")
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self._apply(entry.after, entry.cursor_after, label="redo")
        return True

    def _apply(self, lines: Sequence[str], cursor: Cursor, *, label: str) -> None:
        self.document.restore(lines)
        self.state.clear_selection()
        self.set_cursor(*cursor)
        self.refresh_dirty()
        telemetry.record_event(
            f"buffer.{label}",
            data={"buffer": self.name, "version": self.document.version},
        )

    def refresh_dirty(self) -> None:
        self.document.dirty = tuple(self.document.snapshot()) != self._clean


class Transaction(AbstractContextManager["Transaction"]):
    """Snapshot-on-open, record-on-commit unit of work."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.outermost = False
        self._before: Tuple[str, ...] = ()
        self._cursor_before: Cursor = (0, 0)
        self._span_cm: Optional[ContextManager[object]] = None

    def open(self) -> None:
        if self.buffer._active is not None:
            return
        self.outermost = True
        self.buffer._active = self
        self._before = tuple(self.buffer.document.snapshot())
        self._cursor_before = self.buffer.state.cursor

    def commit(self) -> Optional[UndoEntry]:
        if not self.outermost:
            return None
        self._close()
        after = tuple(self.buffer.document.snapshot())
        self.buffer.refresh_dirty()
        if after == self._before:
            return None
        entry = UndoEntry(
            label=self.label,
            before=self._before,
            after=after,
            cursor_before=self._cursor_before,
            cursor_after=self.buffer.state.cursor,
        )
        self.buffer.undo_timeline.push(entry)
        return entry

    def rollback(self) -> None:
        if not self.outermost:
            return
        self._close()
        if tuple(self.buffer.document.snapshot()) != self._before:
            self.buffer.document.restore(self._before)
        self.buffer.state.clear_selection()
        self.buffer.set_cursor(*self._cursor_before)
        self.buffer.refresh_dirty()
        telemetry.record_event(
            "buffer.rollback", data={"buffer": self.buffer.name, "label": self.label}
        )

    def _close(self) -> None:
        if self.buffer._active is self:
            self.buffer._active = None
        self.outermost = False

    def __enter__(self) -> "Transaction":
        self.open()
        if self.outermost:
            self._span_cm = telemetry.span(
                name=f"buffer::{self.label}",
                component=True,
                metadata={"buffer": self.buffer.name},
            )
            self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
                self._span_cm = None
        return False


__all__ = ["Buffer", "Transaction"]
