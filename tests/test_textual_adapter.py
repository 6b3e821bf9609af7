from __future__ import annotations

from typing import Any, Dict, List

from notevim.adapters.textual import (
    TextualUIHooks,
    TextualVimAdapter,
    normalize_textual_key,
)
from notevim.adapters.textual.app import render_mirror
from notevim.buffer import BufferMirror
from notevim.config import EditorConfig
from notevim.engine import NoteEditor


def make_editor(text: str = "") -> NoteEditor:
    return NoteEditor(text, name="test.md", config=EditorConfig())


def test_adapter_updates_buffer_and_status() -> None:
    editor = make_editor()
    updates: List[BufferMirror] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=updates.append,
        update_status=statuses.append,
    )
    adapter = TextualVimAdapter(editor, hooks)

    adapter.handle_textual_key("i")
    adapter.handle_textual_key("x", text="x")
    adapter.handle_textual_key("ESC")

    assert updates[-1].text == "x"
    assert updates[-1].mode == "normal"
    assert "enter_insert" in statuses
    assert statuses[-1] == "insert_commit"


def test_adapter_snapshot_carries_mode_style() -> None:
    editor = make_editor("abc")
    updates: List[BufferMirror] = []
    adapter = TextualVimAdapter(editor, TextualUIHooks(update_buffer=updates.append))

    adapter.handle_textual_key("d")

    mirror = updates[-1]
    assert mirror.mode_label == "NORMAL d-"
    assert mirror.attributes["color"] == "#E5C07B"
    assert "d: Line" in mirror.attributes["hint"]


def test_adapter_relays_save_events() -> None:
    editor = make_editor("- item")
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualVimAdapter(editor, hooks)

    adapter.handle_textual_key("A")
    adapter.handle_textual_key("!", text="!")
    adapter.handle_textual_key("s", modifiers=("ctrl",))

    assert ("editor.save", "- item!") in events
    assert editor.mode == "normal"


def test_adapter_surfaces_visual_selection_events() -> None:
    editor = make_editor("hello")
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualVimAdapter(editor, hooks)

    adapter.handle_textual_key("v")
    adapter.handle_textual_key("l")
    adapter.handle_textual_key("y")

    visual_payloads = [event for event in events if event["name"] == "visual.selection"]
    assert visual_payloads
    assert visual_payloads[-1]["payload"] == {"anchor": (0, 0)}
    yanks = [event for event in events if event["name"] == "visual.yank"]
    assert yanks[-1]["payload"] == {"start": (0, 0), "end": (0, 2)}


def test_adapter_relays_pending_delete_range() -> None:
    editor = make_editor("one two")
    events: List[tuple[str, object | None]] = []
    updates: List[BufferMirror] = []
    hooks = TextualUIHooks(
        update_buffer=updates.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualVimAdapter(editor, hooks)

    adapter.handle_textual_key("d")
    adapter.handle_textual_key("w")

    pending = {"target": "word_forward", "range": ((0, 0), (0, 3))}
    assert ("operator.pending", pending) in events
    assert updates[-1].pending == ((0, 0), (0, 3))
    assert updates[-1].mode_label == "NORMAL [DEL]"


def test_adapter_emits_log_lines() -> None:
    editor = make_editor()
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        log=logs.append,
    )
    adapter = TextualVimAdapter(editor, hooks)

    adapter.handle_textual_key("i")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
    assert any("mode='insert'" in line for line in logs)


def test_handle_raw_key_normalizes_textual_names() -> None:
    editor = make_editor("abc")
    adapter = TextualVimAdapter(editor, TextualUIHooks(update_buffer=lambda m: None))

    adapter.handle_raw_key("i")
    adapter.handle_raw_key("z", "z")
    adapter.handle_raw_key("escape")

    assert editor.text() == "zabc"
    assert editor.mode == "normal"
    assert adapter.handle_raw_key("f5") is None


def test_normalize_textual_key() -> None:
    assert normalize_textual_key("escape") == ("ESC", None, ())
    assert normalize_textual_key("enter") == ("ENTER", None, ())
    assert normalize_textual_key("ctrl+r") == ("r", None, ("ctrl",))
    assert normalize_textual_key("shift+g", "G") == ("G", "G", ())
    assert normalize_textual_key("dollar_sign", "$") == ("$", "$", ())
    assert normalize_textual_key("f5") is None


def test_render_mirror_marks_cursor_and_selection() -> None:
    mirror = BufferMirror(
        lines=("abc", ""),
        cursor=(0, 2),
        selection=((0, 0), (0, 2)),
    )

    rendered = render_mirror(mirror)

    assert rendered.plain == "abc\n"
    styles = {str(span.style) for span in rendered.spans}
    assert "reverse" in styles
    assert "on #3E4451" in styles
