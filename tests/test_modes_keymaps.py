from __future__ import annotations

from typing import Any, Dict, Optional

import pytest

from notevim.buffer import Buffer
from notevim.keymaps import (
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    load_default_keymaps,
)
from notevim.modes import (
    DeleteConfirmMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    NormalMode,
    OperatorPendingMode,
    PendingDelete,
    PendingOperator,
    VisualMode,
)
from notevim.modes.mode_manager import ModeManager


def make_context(
    registry: KeymapRegistry,
    resolver: KeymapResolver,
    *,
    buffer: Optional[Buffer] = None,
) -> ModeContext:
    extras: Dict[str, Any] = {
        "keymap_registry": registry,
        "keymap_resolver": resolver,
    }
    return ModeContext(buffer=buffer or Buffer(), bus=ModeBus(), extras=extras)


def default_context(text: str = "") -> ModeContext:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return make_context(registry, KeymapResolver(registry), buffer=Buffer.from_text(text))


def make_manager(context: ModeContext) -> ModeManager:
    manager = ModeManager(
        context,
        keymap_registry=context.extras["keymap_registry"],
        keymap_resolver=context.extras["keymap_resolver"],
        load_defaults=False,
    )
    for mode_cls in (
        NormalMode,
        InsertMode,
        VisualMode,
        OperatorPendingMode,
        DeleteConfirmMode,
    ):
        manager.register_mode(mode_cls)
    return manager


def test_normal_mode_uses_keymap_binding() -> None:
    context = default_context()
    mode = NormalMode(context)

    result = mode.handle_key(KeyInput(key="i"))

    assert result.switch_to == "insert"
    assert result.consumed is True
    assert context.session is not None


def test_insert_mode_escape_binding() -> None:
    context = default_context()
    mode = InsertMode(context)
    mode.on_enter("normal")

    result = mode.handle_key(KeyInput(key="ESC"))

    assert result.switch_to == "normal"
    assert result.consumed is True
    assert context.session is None


def test_normal_mode_pending_sequence_waits_without_timeout() -> None:
    context = default_context("one\ntwo\nthree")
    context.buffer.set_cursor(2, 3)
    mode = NormalMode(context)

    pending = mode.handle_key(KeyInput(key="g"))
    assert pending.status == "pending"
    assert pending.consumed is True
    assert mode.pending_tokens == ("g",)

    match = mode.handle_key(KeyInput(key="g"))
    assert match.message == "document_start"
    assert context.buffer.cursor == (0, 0)


def test_normal_mode_diverging_prefix_retries_last_key() -> None:
    context = default_context("abc")
    mode = NormalMode(context)

    mode.handle_key(KeyInput(key="g"))
    result = mode.handle_key(KeyInput(key="l"))

    assert result.message == "char_right"
    assert context.buffer.cursor == (0, 1)
    assert mode.pending_tokens == ()


def test_custom_binding_overrides_default() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    registry.register_binding(
        Binding(
            id="normal.custom_gg",
            mode="normal",
            sequence=KeySequence.from_strings("g", "g"),
            action_id="core.insert_before",
        ),
        replace=True,
    )
    context = make_context(registry, KeymapResolver(registry))
    mode = NormalMode(context)

    mode.handle_key(KeyInput(key="g"))
    match = mode.handle_key(KeyInput(key="g"))

    assert match.switch_to == "insert"


def test_normal_mode_count_prefix_repeats_motion() -> None:
    context = default_context("\n".join(f"line{i}" for i in range(6)))
    mode = NormalMode(context)

    first = mode.handle_key(KeyInput(key="3"))
    assert first.status == "pending"
    assert context.count == 3

    mode.handle_key(KeyInput(key="j"))

    assert context.buffer.cursor == (3, 0)
    assert context.count is None


def test_normal_mode_zero_is_line_start_without_count() -> None:
    context = default_context("abcdef")
    context.buffer.set_cursor(0, 4)
    mode = NormalMode(context)

    mode.handle_key(KeyInput(key="0"))

    assert context.buffer.cursor == (0, 0)
    assert context.count is None


def test_normal_mode_zero_extends_count() -> None:
    context = default_context("x" * 30)
    mode = NormalMode(context)

    mode.handle_key(KeyInput(key="1"))
    mode.handle_key(KeyInput(key="0"))
    mode.handle_key(KeyInput(key="l"))

    assert context.buffer.cursor == (0, 10)


def test_unmapped_key_in_normal_mode_is_not_consumed() -> None:
    context = default_context("abc")
    mode = NormalMode(context)

    result = mode.handle_key(KeyInput(key="Z"))

    assert result.consumed is False
    assert result.status == "miss"


def test_modifier_keys_resolve_through_tokens() -> None:
    context = default_context("abc")
    saved: list[object] = []
    context.bus.subscribe("editor.save", saved.append)
    mode = NormalMode(context)

    mode.handle_key(KeyInput(key="s", modifiers=("CTRL",)))

    assert saved == ["abc"]


def test_mode_manager_switches_to_visual_mode() -> None:
    context = default_context("abc")
    manager = make_manager(context)

    result = manager.handle_key(KeyInput(key="v"))

    assert result.switch_to == "visual"
    assert manager.active_mode and manager.active_mode.name == "visual"
    assert context.buffer.state.selection == ((0, 0), (0, 0))


def test_mode_manager_rejects_unknown_mode() -> None:
    manager = make_manager(default_context())

    with pytest.raises(KeyError):
        manager.switch_mode("command")


def test_mode_manager_requires_a_mode() -> None:
    context = default_context()
    manager = ModeManager(
        context,
        keymap_registry=context.extras["keymap_registry"],
        keymap_resolver=context.extras["keymap_resolver"],
        load_defaults=False,
    )

    with pytest.raises(RuntimeError):
        manager.handle_key(KeyInput(key="i"))


def test_mode_manager_duplicate_registration_fails() -> None:
    manager = make_manager(default_context())

    with pytest.raises(ValueError):
        manager.register_mode(NormalMode)


def test_operator_pending_redispatches_unknown_key_to_normal() -> None:
    context = default_context("abc")
    manager = make_manager(context)

    manager.handle_key(KeyInput(key="d"))
    assert isinstance(context.pending, PendingOperator)
    assert manager.mode_name == "operator_pending"

    result = manager.handle_key(KeyInput(key="l"))

    assert manager.mode_name == "normal"
    assert context.pending is None
    assert result.message == "char_right"
    assert context.buffer.cursor == (0, 1)
    assert context.buffer.text() == "abc"


def test_operator_pending_escape_cancels_without_redispatch() -> None:
    context = default_context("abc")
    exits: list[object] = []
    context.bus.subscribe("editor.exit", exits.append)
    manager = make_manager(context)

    manager.handle_key(KeyInput(key="d"))
    result = manager.handle_key(KeyInput(key="ESC"))

    assert result.status == "cancelled"
    assert manager.mode_name == "normal"
    assert exits == []


def test_delete_confirm_holds_range_until_confirmed() -> None:
    context = default_context("hello world")
    manager = make_manager(context)

    manager.handle_key(KeyInput(key="d"))
    manager.handle_key(KeyInput(key="w"))

    assert manager.mode_name == "delete_confirm"
    assert isinstance(context.pending, PendingDelete)
    assert context.pending.range == ((0, 0), (0, 5))
    assert context.buffer.text() == "hello world"
    assert context.buffer.cursor == (0, 0)


def test_delete_confirm_redispatch_is_applied_once() -> None:
    context = default_context("hello world")
    manager = make_manager(context)

    manager.handle_key(KeyInput(key="d"))
    manager.handle_key(KeyInput(key="w"))
    result = manager.handle_key(KeyInput(key="d"))
    assert result.message == "deleted"

    manager.handle_key(KeyInput(key="d"))
    manager.handle_key(KeyInput(key="w"))
    manager.handle_key(KeyInput(key="x"))

    assert manager.mode_name == "normal"
    assert context.buffer.text() == "world"


def test_visual_mode_selection_and_yank() -> None:
    context = default_context("alpha")
    mode = VisualMode(context)
    mode.on_enter("normal")

    mode.handle_key(KeyInput(key="l"))
    assert context.buffer.state.selection == ((0, 0), (0, 1))

    yank = mode.handle_key(KeyInput(key="y"))

    assert yank.switch_to == "normal"
    value = context.buffer.register.get()
    assert value is not None
    assert value.text == "al"
    assert value.kind == "character"


def test_visual_mode_swap_anchor() -> None:
    context = default_context("abcd")
    mode = VisualMode(context)
    mode.on_enter("normal")

    mode.handle_key(KeyInput(key="l"))
    swap = mode.handle_key(KeyInput(key="o"))

    assert swap.status == "visual_select"
    assert context.buffer.state.cursor == (0, 0)
    assert context.buffer.state.selection == ((0, 1), (0, 0))


def test_visual_mode_delete_selection_returns_to_normal() -> None:
    context = default_context("alpha")
    mode = VisualMode(context)
    mode.on_enter("normal")
    mode.handle_key(KeyInput(key="l"))

    result = mode.handle_key(KeyInput(key="d"))

    assert result.switch_to == "normal"
    assert context.buffer.text() == "pha"
    value = context.buffer.register.get()
    assert value is not None and value.text == "al"


def test_visual_mode_change_selection_switches_to_insert() -> None:
    context = default_context("alpha")
    mode = VisualMode(context)
    mode.on_enter("normal")
    mode.handle_key(KeyInput(key="l"))

    result = mode.handle_key(KeyInput(key="c"))

    assert result.switch_to == "insert"
    assert context.buffer.text() == "pha"
    assert context.session is not None


def test_visual_mode_exit_clears_selection() -> None:
    context = default_context("alpha")
    manager = make_manager(context)

    manager.handle_key(KeyInput(key="v"))
    manager.handle_key(KeyInput(key="l"))
    manager.handle_key(KeyInput(key="ESC"))

    assert manager.mode_name == "normal"
    assert context.buffer.state.selection is None
    assert context.buffer.text() == "alpha"


def test_insert_mode_types_unmapped_printable_keys() -> None:
    context = default_context("")
    manager = make_manager(context)

    manager.handle_key(KeyInput(key="i"))
    for char in "hi!":
        manager.handle_key(KeyInput(key=char, text=char))
    manager.handle_key(KeyInput(key="ESC"))

    assert context.buffer.text() == "hi!"
    assert len(context.buffer.undo_timeline) == 1


def test_insert_mode_ignores_unprintable_keys() -> None:
    context = default_context("abc")
    manager = make_manager(context)

    manager.handle_key(KeyInput(key="i"))
    result = manager.handle_key(KeyInput(key="F5"))

    assert result.consumed is False
    assert context.buffer.text() == "abc"


def test_visual_motions_extend_selection_from_anchor() -> None:
    context = default_context("hello world")
    manager = make_manager(context)

    manager.handle_key(KeyInput(key="v"))
    forward = manager.handle_key(KeyInput(key="w"))

    assert forward.status == "visual_select"
    assert forward.message == "word_forward"
    assert context.buffer.state.selection == ((0, 0), (0, 6))

    back = manager.handle_key(KeyInput(key="b"))

    assert back.message == "word_backward"
    assert context.buffer.state.selection == ((0, 0), (0, 0))
    assert manager.mode_name == "visual"


def test_visual_motion_restarts_missing_selection() -> None:
    context = default_context("abc")
    mode = VisualMode(context)
    mode.on_enter("normal")
    context.buffer.state.clear_selection()

    result = mode.handle_key(KeyInput(key="l"))

    assert result.status == "visual_select"
    assert context.buffer.state.selection == ((0, 0), (0, 1))


def test_visual_motion_against_edge_is_noop() -> None:
    context = default_context("abc")
    mode = VisualMode(context)
    mode.on_enter("normal")

    result = mode.handle_key(KeyInput(key="h"))

    assert result.status == "noop"
    assert context.buffer.state.selection == ((0, 0), (0, 0))
