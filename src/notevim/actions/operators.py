"""Delete operator: target selection, confirmation and cancellation.

``d`` in Normal mode stores a :class:`PendingOperator`. The target key turns
it into a :class:`PendingDelete` holding the half-open range to remove, which
the host highlights until the operator key is pressed again to confirm.
"""

from __future__ import annotations

from notevim.buffer import Buffer, Cursor
from notevim.buffer.sync import Range
from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import (
    ModeContext,
    ModeResult,
    PendingDelete,
    PendingOperator,
)
from notevim.modes.operator_pending_mode import cancel_pending
from notevim.motions import backward_word_boundary, word_end_forward
from notevim.runtime import telemetry


def line_range(buffer: Buffer, row: int) -> Range:
    """Range covering line ``row`` plus one adjacent line break.

    The following break is taken when there is one; on the last line the
    preceding break goes instead. A lone line only loses its text.
    """

    if row + 1 < buffer.line_count:
        return ((row, 0), (row + 1, 0))
    if row > 0:
        above = buffer.document.line_length(row - 1)
        return ((row - 1, above), (row, buffer.document.line_length(row)))
    return ((0, 0), (0, buffer.document.line_length(0)))


def word_forward_range(buffer: Buffer, cursor: Cursor) -> Range:
    return (cursor, word_end_forward(buffer, cursor))


def word_backward_range(buffer: Buffer, cursor: Cursor) -> Range:
    return (backward_word_boundary(buffer, cursor), cursor)


_TARGETS = {
    "word_forward": word_forward_range,
    "word_backward": word_backward_range,
}


def select_target(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    pending = context.pending
    if not isinstance(pending, PendingOperator):
        return cancel_pending(context, message="no_operator")

    target = str(match.action.metadata.get("target", "line"))
    buffer = context.buffer
    cursor = buffer.cursor
    if target == "line":
        span = line_range(buffer, cursor[0])
    else:
        span = _TARGETS[target](buffer, cursor)
        if span[0] == span[1]:
            return cancel_pending(context, message="empty_target")

    context.pending = PendingDelete(
        operator=pending.operator,
        target=target,
        range=span,
        linewise=target == "line",
    )
    telemetry.record_event(
        "operator.target",
        data={"operator": pending.operator, "target": target, "range": span},
    )
    return ModeResult(
        consumed=True, switch_to="delete_confirm", message=f"confirm_{target}"
    )


def confirm_delete(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Commit the pending delete if the key matches the pending operator."""

    pending = context.pending
    if not isinstance(pending, PendingDelete):
        return cancel_pending(context, message="nothing_pending")
    key = match.binding.sequence.tokens[-1]
    if key != pending.operator:
        return cancel_and_redispatch(context, match)

    buffer = context.buffer
    start, end = pending.range
    with buffer.transaction(f"delete_{pending.target}"):
        if pending.linewise:
            row = buffer.cursor[0]
            text = buffer.line(row)
            buffer.delete_range(start, end)
            buffer.set_cursor(min(row, buffer.line_count - 1), 0)
        else:
            text = buffer.delete_range(start, end)
    buffer.register.store(text, kind="line" if pending.linewise else "character")
    context.pending = None
    return ModeResult(consumed=True, switch_to="normal", message="deleted")


def cancel_operator(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return cancel_pending(context, message="cancelled")


def cancel_and_redispatch(context: ModeContext, match) -> ModeResult:
    del match
    return cancel_pending(context, message="redispatch", redispatch=True)


__all__ = [
    "line_range",
    "word_forward_range",
    "word_backward_range",
    "select_target",
    "confirm_delete",
    "cancel_operator",
    "cancel_and_redispatch",
]
