"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from notevim.keymaps import KeymapResolver, ResolutionMatch
from notevim.keymaps.models import make_token
from notevim.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    return make_token(key.key, key.modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


class KeymapMode(Mode):
    """Mode that resolves key tokens through its mode keymap.

    The mode only holds the prefix the resolver hands back; waiting and
    retrying after a diverging key are the resolver's job. Keys that
    resolve to nothing go to :meth:`on_unmapped`.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"notevim.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._held: tuple[str, ...] = ()

    @property
    def pending_tokens(self) -> tuple[str, ...]:
        return self._held

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._held = ()

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, self._held, key_to_token(key))
        self._held = result.held
        if result.dropped:
            telemetry.record_event(
                "keymaps.prefix_dropped",
                data={"mode": self.name, "dropped": " ".join(result.dropped)},
            )

        if result.status == "match" and result.match:
            return self._execute_match(result.match)
        if result.status == "pending":
            return ModeResult(
                consumed=True, status="pending", message="awaiting_sequence"
            )
        return self.on_unmapped(key)

    def on_unmapped(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = [
    "KeymapMode",
    "key_to_token",
    "require_keymap_resolver",
]
