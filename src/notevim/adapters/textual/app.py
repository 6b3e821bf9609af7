"""Executable Textual app that edits a single markdown note."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from notevim.buffer import BufferMirror
from notevim.engine import NoteEditor
from notevim.runtime import telemetry

from .controller import TextualUIHooks, TextualVimAdapter

SELECTION_STYLE = "on #3E4451"
PENDING_STYLE = "bold white on #BE5046"
CURSOR_STYLE = "reverse"


def render_mirror(mirror: BufferMirror) -> Text:
    """Styled text for ``mirror`` with cursor, selection and pending delete."""

    text = Text()
    for row, line in enumerate(mirror.lines):
        for col, char in enumerate(line):
            text.append(char, style=_style_at(mirror, (row, col)))
        if mirror.cursor == (row, len(line)):
            text.append(" ", style=CURSOR_STYLE)
        elif _in_pending(mirror, (row, len(line))):
            text.append(" ", style=PENDING_STYLE)
        if row + 1 < len(mirror.lines):
            text.append("\n")
    return text


def _in_pending(mirror: BufferMirror, position: tuple[int, int]) -> bool:
    if mirror.pending is None:
        return False
    start, end = mirror.pending
    return start <= position < end


def _style_at(mirror: BufferMirror, position: tuple[int, int]) -> str:
    if position == mirror.cursor:
        return CURSOR_STYLE
    if _in_pending(mirror, position):
        return PENDING_STYLE
    if mirror.selection is not None:
        start, end = mirror.selection
        if start <= position <= end:
            return SELECTION_STYLE
    return ""


@dataclass
class UIState:
    status_text: str = ""
    quit_armed: bool = False


class NoteEditorApp(App[None]):
    """Single-pane note editor with a mode indicator in the border."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, path: Optional[Path] = None) -> None:
        super().__init__()
        self.path = path
        self._state = UIState()
        self.editor: NoteEditor | None = None
        self.adapter: TextualVimAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        text = ""
        if self.path is not None and self.path.exists():
            text = self.path.read_text(encoding="utf-8")
        name = self.path.name if self.path else "scratch"
        self.title = name
        self.editor = NoteEditor(text, name=name)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
        )
        self.adapter = TextualVimAdapter(self.editor, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        self.adapter.handle_raw_key(event.key, event.character)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if not self._buffer_widget:
            return
        self._buffer_widget.update(render_mirror(mirror))
        marker = " *" if mirror.dirty else ""
        hint = mirror.attributes.get("hint", "")
        self._buffer_widget.border_title = f" {mirror.mode_label}{marker} | {hint} "
        color = mirror.attributes.get("color")
        if color:
            self._buffer_widget.styles.border = ("round", color)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "editor.save" and isinstance(payload, str):
            self._write(payload)
        elif name == "editor.exit":
            dirty = isinstance(payload, dict) and bool(payload.get("dirty"))
            self._request_exit(dirty)

    def _write(self, text: str) -> None:
        if self.path is None or self.editor is None:
            self._update_status("No file to save to")
            return
        with telemetry.span(
            "app::save", component=True, metadata={"path": str(self.path)}
        ):
            self.path.write_text(text, encoding="utf-8")
        self.editor.mark_clean()
        self._state.quit_armed = False
        self._update_status(f"Saved {self.path}")

    def _request_exit(self, dirty: bool) -> None:
        if dirty and not self._state.quit_armed:
            self._state.quit_armed = True
            self._update_status("Unsaved changes: Ctrl+S saves, Esc again discards")
            return
        self.exit()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a markdown note.")
    parser.add_argument("path", nargs="?", type=Path, help="Note file to open")
    parser.add_argument(
        "--telemetry",
        choices=("development", "quiet", "trace"),
        default="quiet",
        help="Telemetry preset (default: quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.telemetry)
    NoteEditorApp(args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
