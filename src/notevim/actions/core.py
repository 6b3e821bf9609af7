"""Core action implementations shared across modes.

Handlers take ``(context, match)`` and return a :class:`ModeResult`. Actions
that differ only in a parameter (which motion, where to start inserting,
which side to paste on) share one handler and read the parameter from the
action's ``metadata``.
"""

from __future__ import annotations

from notevim.buffer import Buffer
from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult, PendingOperator
from notevim.motions import Motion, move_by
from notevim.runtime import telemetry


def _param(match: ResolutionMatch, key: str, default: str = "") -> str:
    return str(match.action.metadata.get(key, default))


def move_cursor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    motion = Motion(_param(match, "motion"))
    before = context.buffer.cursor
    after = move_by(context.buffer, motion, context.take_count())
    status = "ok" if after != before else "noop"
    return ModeResult(consumed=True, status=status, message=motion.value)


def _first_char(buffer: Buffer, row: int) -> int:
    line = buffer.line(row)
    return len(line) - len(line.lstrip())


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Open an insertion session, then place the cursor for the trigger.

    The session starts before the cursor moves or a line is opened so that
    cancelling Insert restores the exact pre-trigger state.
    """

    where = _param(match, "where", "before")
    buffer = context.buffer
    context.count = None
    context.session = buffer.begin_session(f"insert_{where}")
    row, col = buffer.cursor
    if where == "after":
        buffer.set_cursor(row, col + 1)
    elif where == "line_start":
        buffer.set_cursor(row, _first_char(buffer, row))
    elif where == "line_end":
        buffer.set_cursor(row, buffer.document.line_length(row))
    elif where == "open_below":
        buffer.insert_lines(row + 1, [""])
        buffer.set_cursor(row + 1, 0)
    elif where == "open_above":
        buffer.insert_lines(row, [""])
        buffer.set_cursor(row, 0)
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def enter_visual_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.count = None
    return ModeResult(consumed=True, switch_to="visual", message="enter_visual")


def begin_operator(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    context.count = None
    context.pending = PendingOperator(operator=_param(match, "operator", "d"))
    return ModeResult(
        consumed=True, switch_to="operator_pending", message="operator_pending"
    )


def request_exit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Normal-mode escape: drop any count and ask the host to leave the editor."""

    del match
    context.count = None
    context.bus.emit("editor.exit", {"dirty": context.buffer.dirty})
    return ModeResult(consumed=True, status="noop", message="exit_requested")


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    changed = False
    for _ in range(context.take_count()):
        if not context.buffer.undo():
            break
        changed = True
    return ModeResult(consumed=True, status="ok" if changed else "noop", message="undo")


def redo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    changed = False
    for _ in range(context.take_count()):
        if not context.buffer.redo():
            break
        changed = True
    return ModeResult(consumed=True, status="ok" if changed else "noop", message="redo")


def paste(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Insert the register; char-wise inline, line-wise as whole lines.

    ``side="after"`` puts line-wise text below the cursor line, ``"before"``
    above it. Char-wise text always lands at the cursor.
    """

    side = _param(match, "side", "after")
    buffer = context.buffer
    context.count = None
    value = buffer.register.get()
    if value is None:
        return ModeResult(consumed=True, status="noop", message="register_empty")

    row, _ = buffer.cursor
    with buffer.transaction(f"paste_{side}"):
        if value.linewise:
            index = row + 1 if side == "after" else row
            buffer.insert_lines(index, value.lines())
            buffer.set_cursor(index, 0)
        else:
            buffer.insert_text(value.text)
    return ModeResult(consumed=True, message=f"paste_{value.kind}")


def delete_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Delete under the cursor; at end of line, join the next line."""

    del match
    buffer = context.buffer
    count = context.take_count()
    row, col = buffer.cursor
    length = buffer.document.line_length(row)
    if col < length:
        end = (row, min(length, col + count))
    elif row + 1 < buffer.line_count:
        end = (row + 1, 0)
    else:
        return ModeResult(consumed=True, status="noop")

    with buffer.transaction("delete_char"):
        removed = buffer.delete_range((row, col), end)
    buffer.register.store(removed, kind="character")
    return ModeResult(consumed=True, message="delete_char")


def yank_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    count = context.take_count()
    row = buffer.cursor[0]
    last = min(buffer.line_count, row + count)
    buffer.register.store("\n".join(buffer.lines()[row:last]), kind="line")
    return ModeResult(consumed=True, message="yank_line")


def save(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Hand the full text to whoever persists it; the engine does no I/O."""

    del match
    context.count = None
    text = context.buffer.text()
    telemetry.record_event(
        "editor.save",
        level="info",
        data={"buffer": context.buffer.name, "lines": context.buffer.line_count},
    )
    context.bus.emit("editor.save", text)
    return ModeResult(consumed=True, message="save")


__all__ = [
    "move_cursor",
    "enter_insert_mode",
    "enter_visual_mode",
    "begin_operator",
    "request_exit",
    "undo",
    "redo",
    "paste",
    "delete_char",
    "yank_line",
    "save",
]
