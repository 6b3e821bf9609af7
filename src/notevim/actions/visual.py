"""Actions dedicated to Visual mode selection management.

Motions in Visual mode go through ``extend`` rather than the Normal-mode
motion action: the anchor stays put while the cursor moves, which is what
grows or shrinks the selection.
Yank and delete both read the selection through ``selection_bounds`` so
they agree on which characters are covered.
"""

from __future__ import annotations

from typing import Optional

from notevim.buffer.sync import Range
from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult
from notevim.motions import Motion, extend_selection, selection_bounds

from .core import save


def _bounds(context: ModeContext) -> Optional[Range]:
    return selection_bounds(context.buffer)


def _selection_event(context: ModeContext, name: str, span: Range) -> None:
    context.bus.emit(name, {"start": span[0], "end": span[1]})


def extend(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    motion = Motion(str(match.action.metadata.get("motion", "")))
    before = context.buffer.state.selection
    after = extend_selection(context.buffer, motion, context.take_count())
    status = "visual_select" if after != before else "noop"
    return ModeResult(consumed=True, status=status, message=motion.value)


def yank_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    span = _bounds(context)
    if span is None:
        return ModeResult(consumed=True, switch_to="normal", status="noop")
    buffer = context.buffer
    buffer.register.store(buffer.get_text_range(*span), kind="character")
    buffer.state.clear_selection()
    buffer.set_cursor(*span[0])
    _selection_event(context, "visual.yank", span)
    return ModeResult(consumed=True, switch_to="normal", message="yank")


def _delete(context: ModeContext, label: str) -> Optional[Range]:
    span = _bounds(context)
    if span is None:
        return None
    buffer = context.buffer
    with buffer.transaction(label):
        removed = buffer.delete_range(*span)
    buffer.register.store(removed, kind="character")
    buffer.state.clear_selection()
    _selection_event(context, "visual.delete", span)
    return span


def delete_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if _delete(context, "visual_delete") is None:
        return ModeResult(consumed=True, switch_to="normal", status="noop")
    return ModeResult(consumed=True, switch_to="normal", message="delete")


def change_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Delete the selection and continue in Insert mode.

    The deletion belongs to the insertion session, so one undo reverts both.
    """

    del match
    context.session = context.buffer.begin_session("visual_change")
    _delete(context, "visual_change")
    return ModeResult(consumed=True, switch_to="insert", message="change")


def swap_anchor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.state.swap_anchor()
    return ModeResult(consumed=True, status="visual_select")


def cancel_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.state.clear_selection()
    return ModeResult(consumed=True, switch_to="normal", message="exit_visual")


def save_and_exit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    context.buffer.state.clear_selection()
    save(context, match)
    return ModeResult(consumed=True, switch_to="normal", message="save")


__all__ = [
    "extend",
    "yank_selection",
    "delete_selection",
    "change_selection",
    "swap_anchor",
    "cancel_selection",
    "save_and_exit",
]
