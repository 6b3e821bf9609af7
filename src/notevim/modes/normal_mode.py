"""Normal mode: motions, operators and mode triggers."""

from __future__ import annotations

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    """Resolves Normal-mode keys and accumulates count prefixes.

    Digits typed before a command build ``context.count``; ``0`` only counts
    once another digit has started the prefix, otherwise it is the
    line-start motion. A count that no command consumes is dropped.
    """

    name = "normal"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.count = None
        self.context.buffer.state.clear_selection()
        self.context.buffer.clamp_state()

    def handle_key(self, key: KeyInput) -> ModeResult:
        if self._is_count_digit(key):
            self.context.count = (self.context.count or 0) * 10 + int(key.key)
            return ModeResult(consumed=True, status="pending", message="count")

        result = super().handle_key(key)
        if result.status != "pending":
            self.context.count = None
        return result

    def _is_count_digit(self, key: KeyInput) -> bool:
        if key.modifiers or self.pending_tokens:
            return False
        if len(key.key) != 1 or not key.key.isdigit():
            return False
        return key.key != "0" or self.context.count is not None
