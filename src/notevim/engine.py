"""The note editor engine: one buffer, one register, one mode machine."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from notevim.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from notevim.buffer import Buffer, BufferMirror
from notevim.config import EditorConfig, style_for
from notevim.modes import (
    DeleteConfirmMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
    OperatorPendingMode,
    PendingDelete,
    VisualMode,
)
from notevim.modes.mode_manager import ModeManager
from notevim.motions import normalized_range
from notevim.runtime import telemetry


class NoteEditor:
    """Explicitly owned editing engine for a single note.

    Feed it keys with :meth:`handle_key` and render :meth:`snapshot` after
    each one. The engine never touches the filesystem: saving emits
    ``editor.save`` on :attr:`bus` with the full text and the host calls
    :meth:`mark_clean` once it has written it.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "note",
        config: Optional[EditorConfig] = None,
        registry: Optional[KeymapRegistry] = None,
    ) -> None:
        self.config = config or EditorConfig.from_env()
        self.buffer = Buffer.from_text(text, name=name)
        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=self.buffer, bus=self.bus, config=self.config
        )
        if registry is None:
            registry = KeymapRegistry(logger_name="notevim.keymaps")
            load_default_keymaps(registry)
        self.manager = ModeManager(
            self.context,
            keymap_registry=registry,
            keymap_resolver=KeymapResolver(registry, logger_name="notevim.keymaps"),
            load_defaults=False,
        )
        for mode_cls in (
            NormalMode,
            InsertMode,
            VisualMode,
            OperatorPendingMode,
            DeleteConfirmMode,
        ):
            self.manager.register_mode(mode_cls)
        telemetry.record_event(
            "editor.open", data={"buffer": name, "lines": self.buffer.line_count}
        )

    @property
    def mode(self) -> str:
        return self.manager.mode_name

    def handle_key(
        self,
        key: str,
        *,
        modifiers: Iterable[str] = (),
        text: Optional[str] = None,
    ) -> ModeResult:
        return self.manager.handle_key(
            KeyInput(key=key, modifiers=tuple(modifiers), text=text)
        )

    def feed(self, *keys: str) -> ModeResult:
        """Dispatch several keys; ``"ctrl+r"``-style strings carry modifiers."""

        result = ModeResult(consumed=False, status="noop")
        for spec in keys:
            *mods, key = spec.split("+") if len(spec) > 1 else [spec]
            result = self.handle_key(key, modifiers=mods)
        return result

    def type(self, text: str) -> None:
        for char in text:
            self.handle_key(char, text=char)

    def text(self) -> str:
        return self.buffer.text()

    def load(self, text: str) -> None:
        """Replace the note content and start a fresh history.

        The register is kept so text can be carried between notes.
        """

        if self.mode != NormalMode.name:
            self.manager.switch_mode(NormalMode.name)
        self.buffer.load(text)
        self.context.pending = None
        self.context.count = None

    def mark_clean(self) -> None:
        self.buffer.mark_clean()

    def on(self, event: str, callback: Callable[[object], None]) -> None:
        self.bus.subscribe(event, callback)

    def snapshot(self) -> BufferMirror:
        buffer = self.buffer
        pending = self.context.pending
        style = style_for(self.mode)
        return BufferMirror(
            lines=tuple(buffer.lines()),
            cursor=buffer.cursor,
            selection=normalized_range(buffer),
            pending=pending.range if isinstance(pending, PendingDelete) else None,
            mode=self.mode,
            mode_label=style.label,
            dirty=buffer.dirty,
            version=buffer.document.version,
            attributes={"color": style.color, "hint": style.hint},
        )

    def pull_buffer(self) -> BufferMirror:
        return self.snapshot()


__all__ = ["NoteEditor"]
