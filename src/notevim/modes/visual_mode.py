"""Visual mode: character-wise selection anchored where it was entered."""

from __future__ import annotations

from .keymap_helpers import KeymapMode


class VisualMode(KeymapMode):
    name = "visual"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.buffer.state.start_selection()
        self.context.bus.emit(
            "visual.selection", {"anchor": self.context.buffer.state.anchor}
        )

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.context.buffer.state.clear_selection()
