"""Mode manager coordinating Normal/Insert/Visual and the operator modes."""

from __future__ import annotations

from typing import Dict, Optional, Type

from notevim.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from notevim.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

MAX_REDISPATCH = 1


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    Dispatch is a single loop: a mode may hand the key back through
    ``ModeResult.redispatch`` after switching, and the loop feeds it to the
    new mode at most ``MAX_REDISPATCH`` times.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("notevim.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="notevim.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="notevim.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def mode_name(self) -> str:
        return self._active or ""

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            data={"mode": name, "previous": previous.name if previous else None},
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        attempts = 0
        while True:
            mode = self.active_mode
            if mode is None:
                raise RuntimeError("No active mode registered")
            with telemetry.span(
                name=f"mode::{mode.name}",
                component=True,
                metadata={"key": key.key, "mode": mode.name, "attempt": attempts},
            ):
                result = mode.handle_key(key)
            if result.switch_to:
                self.switch_mode(result.switch_to)
            if not result.redispatch or attempts >= MAX_REDISPATCH:
                return result
            attempts += 1
