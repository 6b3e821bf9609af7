"""Insert mode: printable keys become text inside one insertion session."""

from __future__ import annotations

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class InsertMode(KeymapMode):
    """Types unbound printable keys at the cursor.

    Entering opens an insertion session unless the trigger already did;
    leaving by any route other than cancel commits it.
    """

    name = "insert"

    def on_enter(self, previous: str | None) -> None:
        del previous
        if self.context.session is None:
            self.context.session = self.context.buffer.begin_session("insert")

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        session = self.context.session
        self.context.session = None
        if session is not None:
            session.commit()

    def on_unmapped(self, key: KeyInput) -> ModeResult:
        text = key.printable
        if text is None:
            return ModeResult(consumed=False, status="miss")
        self.context.buffer.insert_text(text)
        return ModeResult(consumed=True, message="insert_text")
