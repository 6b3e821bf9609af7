"""Textual adapter that wires NoteEditor events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from notevim.buffer import BufferMirror
from notevim.engine import NoteEditor
from notevim.modes import ModeResult
from notevim.runtime import telemetry

NAMED_KEYS: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
}

FORWARDED_EVENTS = (
    "editor.save",
    "editor.exit",
    "operator.pending",
    "visual.selection",
    "visual.yank",
    "visual.delete",
)


def normalize_textual_key(
    key: str, character: Optional[str] = None
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Map a Textual key name to ``(key, text, modifiers)`` for the engine.

    Textual reports modified keys as ``"ctrl+r"``; printable keys carry their
    character, which becomes the key itself so ``"G"`` needs no ``shift``.
    Returns ``None`` for keys the engine has no use for.
    """

    *mods, base = key.split("+") if "+" in key[1:] else [key]
    modifiers = tuple(m for m in mods if m != "shift")
    named = NAMED_KEYS.get(base)
    if named is not None:
        return (named, None, modifiers)
    if modifiers:
        return (base, None, modifiers)
    if character and len(character) == 1 and character.isprintable():
        return (character, character, ())
    if len(base) == 1:
        return (base, base, ())
    return None


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualVimAdapter:
    """Bridges a NoteEditor and its bus events to a Textual-friendly surface."""

    def __init__(self, editor: NoteEditor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Dispatch an already-normalized key and refresh the UI."""

        mods = tuple(modifiers)
        self._log_state("key ->", key=key, text=text, mods=mods)
        result = self.editor.handle_key(key, modifiers=mods, text=text)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def handle_raw_key(
        self, key: str, character: Optional[str] = None
    ) -> Optional[ModeResult]:
        normalized = normalize_textual_key(key, character)
        if normalized is None:
            return None
        name, text, modifiers = normalized
        return self.handle_textual_key(name, text=text, modifiers=modifiers)

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        for event in FORWARDED_EVENTS:
            self.editor.on(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.editor.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        line = " ".join(parts)
        telemetry.record_event("adapter.trace", data={"line": line})
        self.hooks.log(line)

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.editor.buffer
        return {
            "mode": self.editor.mode,
            "cursor": buffer.state.cursor,
            "selection": buffer.state.selection,
            "pending": self.editor.context.pending,
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualVimAdapter", "TextualUIHooks", "normalize_textual_key"]
