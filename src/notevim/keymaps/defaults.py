"""Built-in keymaps that seed each mode with sensible defaults.

Named keys use upper-case tokens (``ESC``, ``ENTER``, ``BACKSPACE``,
``DELETE``, ``TAB``, ``LEFT``, ``RIGHT``, ``UP``, ``DOWN``); modified keys
use ``ctrl+r`` style tokens.
"""

from __future__ import annotations

from notevim.actions import core as core_actions
from notevim.actions import insert as insert_actions
from notevim.actions import operators as operator_actions
from notevim.actions import visual as visual_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

_MOTIONS: tuple[tuple[str, str], ...] = (
    ("char_left", "Move left"),
    ("char_right", "Move right"),
    ("line_up", "Move up"),
    ("line_down", "Move down"),
    ("line_start", "Go to line start"),
    ("line_end", "Go to line end"),
    ("word_forward", "Go to next word"),
    ("word_backward", "Go to previous word"),
    ("document_start", "Go to document start"),
    ("document_end", "Go to document end"),
)

_INSERT_TRIGGERS: tuple[tuple[str, str], ...] = (
    ("before", "Insert before the cursor"),
    ("after", "Insert after the cursor"),
    ("line_start", "Insert at line start"),
    ("line_end", "Insert at line end"),
    ("open_below", "Open a line below"),
    ("open_above", "Open a line above"),
)

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    *(
        ActionRef(
            id=f"motion.{motion}",
            handler=core_actions.move_cursor,
            description=description,
            metadata={"motion": motion},
        )
        for motion, description in _MOTIONS
    ),
    *(
        ActionRef(
            id=f"core.insert_{where}",
            handler=core_actions.enter_insert_mode,
            description=description,
            metadata={"where": where},
        )
        for where, description in _INSERT_TRIGGERS
    ),
    *(
        ActionRef(
            id=f"visual.extend_{motion}",
            handler=visual_actions.extend,
            description=f"{description}, extending the selection",
            metadata={"motion": motion},
        )
        for motion, description in _MOTIONS
    ),
    ActionRef(
        id="core.enter_visual",
        handler=core_actions.enter_visual_mode,
        description="Enter visual mode",
    ),
    ActionRef(
        id="core.request_exit",
        handler=core_actions.request_exit,
        description="Ask the host to leave the editor",
    ),
    ActionRef(id="core.undo", handler=core_actions.undo, description="Undo"),
    ActionRef(id="core.redo", handler=core_actions.redo, description="Redo"),
    ActionRef(
        id="core.paste_after",
        handler=core_actions.paste,
        description="Paste after the cursor",
        metadata={"side": "after"},
    ),
    ActionRef(
        id="core.paste_before",
        handler=core_actions.paste,
        description="Paste before the cursor",
        metadata={"side": "before"},
    ),
    ActionRef(
        id="core.delete_char",
        handler=core_actions.delete_char,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="core.yank_line",
        handler=core_actions.yank_line,
        description="Yank the current line",
    ),
    ActionRef(id="core.save", handler=core_actions.save, description="Save the note"),
    ActionRef(
        id="operator.delete",
        handler=core_actions.begin_operator,
        description="Start a delete",
        metadata={"operator": "d"},
    ),
    ActionRef(
        id="operator.target_line",
        handler=operator_actions.select_target,
        description="Target the whole line",
        metadata={"target": "line"},
    ),
    ActionRef(
        id="operator.target_word_forward",
        handler=operator_actions.select_target,
        description="Target to the end of the word",
        metadata={"target": "word_forward"},
    ),
    ActionRef(
        id="operator.target_word_backward",
        handler=operator_actions.select_target,
        description="Target back to the word start",
        metadata={"target": "word_backward"},
    ),
    ActionRef(
        id="operator.confirm",
        handler=operator_actions.confirm_delete,
        description="Confirm the pending delete",
    ),
    ActionRef(
        id="operator.cancel",
        handler=operator_actions.cancel_operator,
        description="Cancel the pending operator",
    ),
    ActionRef(
        id="insert.newline",
        handler=insert_actions.newline,
        description="Split the line",
    ),
    ActionRef(
        id="insert.backspace",
        handler=insert_actions.backspace,
        description="Delete before the cursor",
    ),
    ActionRef(
        id="insert.delete",
        handler=insert_actions.delete_forward,
        description="Delete under the cursor",
    ),
    ActionRef(
        id="insert.indent",
        handler=insert_actions.indent,
        description="Insert indentation",
    ),
    ActionRef(
        id="insert.commit",
        handler=insert_actions.commit,
        description="Finish inserting",
    ),
    ActionRef(
        id="insert.cancel",
        handler=insert_actions.cancel,
        description="Discard the insertion",
    ),
    ActionRef(
        id="insert.save",
        handler=insert_actions.commit_and_save,
        description="Finish inserting and save",
    ),
    ActionRef(
        id="visual.yank_selection",
        handler=visual_actions.yank_selection,
        description="Yank current visual selection",
    ),
    ActionRef(
        id="visual.delete_selection",
        handler=visual_actions.delete_selection,
        description="Delete current selection",
    ),
    ActionRef(
        id="visual.change_selection",
        handler=visual_actions.change_selection,
        description="Change current selection",
    ),
    ActionRef(
        id="visual.swap_anchor",
        handler=visual_actions.swap_anchor,
        description="Swap selection anchor",
    ),
    ActionRef(
        id="visual.cancel",
        handler=visual_actions.cancel_selection,
        description="Leave visual mode",
    ),
    ActionRef(
        id="visual.save",
        handler=visual_actions.save_and_exit,
        description="Save the note",
    ),
)


def _bind(mode: str, keys: str, action_id: str, description: str = "") -> Binding:
    """Binding for space-separated ``keys``; the id is derived from both."""

    tokens = keys.split(" ")
    return Binding(
        id=f"{mode}.{'_'.join(tokens)}",
        mode=mode,
        sequence=KeySequence.from_strings(*tokens),
        action_id=action_id,
        description=description,
    )


_MOTION_KEYS: tuple[tuple[str, str], ...] = (
    ("h", "char_left"),
    ("LEFT", "char_left"),
    ("l", "char_right"),
    ("RIGHT", "char_right"),
    ("k", "line_up"),
    ("UP", "line_up"),
    ("j", "line_down"),
    ("DOWN", "line_down"),
    ("0", "line_start"),
    ("$", "line_end"),
    ("w", "word_forward"),
    ("b", "word_backward"),
    ("g g", "document_start"),
    ("G", "document_end"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *(_bind("normal", keys, f"motion.{motion}") for keys, motion in _MOTION_KEYS),
    _bind("normal", "i", "core.insert_before", "Insert before the cursor"),
    _bind("normal", "a", "core.insert_after", "Insert after the cursor"),
    _bind("normal", "I", "core.insert_line_start", "Insert at line start"),
    _bind("normal", "A", "core.insert_line_end", "Insert at line end"),
    _bind("normal", "o", "core.insert_open_below", "Open a line below"),
    _bind("normal", "O", "core.insert_open_above", "Open a line above"),
    _bind("normal", "v", "core.enter_visual", "Enter visual mode"),
    _bind("normal", "d", "operator.delete", "Delete operator"),
    _bind("normal", "x", "core.delete_char", "Delete character"),
    _bind("normal", "Y", "core.yank_line", "Yank line"),
    _bind("normal", "p", "core.paste_after", "Paste after"),
    _bind("normal", "P", "core.paste_before", "Paste before"),
    _bind("normal", "u", "core.undo", "Undo"),
    _bind("normal", "ctrl+r", "core.redo", "Redo"),
    _bind("normal", "ctrl+s", "core.save", "Save"),
    _bind("normal", "ESC", "core.request_exit", "Leave the editor"),
    _bind("operator_pending", "d", "operator.target_line", "Delete line"),
    _bind("operator_pending", "w", "operator.target_word_forward", "Delete word"),
    _bind(
        "operator_pending", "b", "operator.target_word_backward", "Delete word back"
    ),
    _bind("operator_pending", "ESC", "operator.cancel", "Cancel"),
    _bind("delete_confirm", "d", "operator.confirm", "Confirm delete"),
    _bind("delete_confirm", "ESC", "operator.cancel", "Cancel delete"),
    _bind("insert", "ESC", "insert.commit", "Leave insert mode"),
    _bind("insert", "ctrl+c", "insert.cancel", "Discard the insertion"),
    _bind("insert", "ctrl+s", "insert.save", "Save"),
    _bind("insert", "ENTER", "insert.newline", "New line"),
    _bind("insert", "BACKSPACE", "insert.backspace", "Backspace"),
    _bind("insert", "DELETE", "insert.delete", "Delete"),
    _bind("insert", "TAB", "insert.indent", "Indent"),
    _bind("insert", "LEFT", "motion.char_left"),
    _bind("insert", "RIGHT", "motion.char_right"),
    _bind("insert", "UP", "motion.line_up"),
    _bind("insert", "DOWN", "motion.line_down"),
    *(
        _bind("visual", keys, f"visual.extend_{motion}")
        for keys, motion in _MOTION_KEYS
    ),
    _bind("visual", "y", "visual.yank_selection", "Yank selection"),
    _bind("visual", "d", "visual.delete_selection", "Delete selection"),
    _bind("visual", "x", "visual.delete_selection", "Delete selection"),
    _bind("visual", "c", "visual.change_selection", "Change selection"),
    _bind("visual", "o", "visual.swap_anchor", "Swap selection anchor"),
    _bind("visual", "ESC", "visual.cancel", "Leave visual mode"),
    _bind("visual", "ctrl+s", "visual.save", "Save"),
)


def load_default_keymaps(registry: KeymapRegistry, *, replace: bool = False) -> None:
    """Register built-in actions and bindings for every mode.

    Hosts that want different keys load the defaults first and then
    register their own bindings with ``replace=True``.
    """

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=replace)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
