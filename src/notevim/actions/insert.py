"""Insert-mode editing verbs.

Every edit made here runs inside the insertion session opened by the trigger
that entered Insert mode, so the whole insertion undoes as a single step.
"""

from __future__ import annotations

from notevim.buffer import ListPrefix
from notevim.config import EditorConfig
from notevim.keymaps import ResolutionMatch
from notevim.modes.base_mode import ModeContext, ModeResult

from .core import save


def _config(context: ModeContext) -> EditorConfig:
    return context.config or EditorConfig()


def newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Split the line at the cursor, continuing markdown list items.

    On a list item with nothing after its marker the marker is removed
    instead of opening a new line.
    """

    del match
    buffer = context.buffer
    row, col = buffer.cursor
    line = buffer.line(row)
    prefix = ListPrefix.detect(line) if _config(context).list_continuation else None

    if prefix is not None and prefix.is_empty_item(line):
        buffer.delete_range((row, 0), (row, prefix.length))
        return ModeResult(consumed=True, message="list_end")

    end = buffer.insert_text("\n", at=(row, col))
    if prefix is not None:
        buffer.insert_text(prefix.continuation(), at=end)
        return ModeResult(consumed=True, message="list_continue")
    return ModeResult(consumed=True, message="newline")


def backspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    row, col = buffer.cursor
    if col > 0:
        buffer.delete_range((row, col - 1), (row, col))
    elif row > 0:
        above = buffer.document.line_length(row - 1)
        buffer.delete_range((row - 1, above), (row, 0))
    else:
        return ModeResult(consumed=True, status="noop")
    return ModeResult(consumed=True, message="backspace")


def delete_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    row, col = buffer.cursor
    if col < buffer.document.line_length(row):
        buffer.delete_range((row, col), (row, col + 1))
    elif row + 1 < buffer.line_count:
        buffer.delete_range((row, col), (row + 1, 0))
    else:
        return ModeResult(consumed=True, status="noop")
    return ModeResult(consumed=True, message="delete")


def indent(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.insert_text(_config(context).indent)
    return ModeResult(consumed=True, message="indent")


def commit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Close the insertion session, recording at most one undo entry."""

    del match
    session = context.session
    context.session = None
    if session is not None:
        session.commit()
    return ModeResult(consumed=True, switch_to="normal", message="insert_commit")


def cancel(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Throw the whole insertion away and restore the pre-insert cursor."""

    del match
    session = context.session
    context.session = None
    if session is not None:
        session.rollback()
    return ModeResult(consumed=True, switch_to="normal", message="insert_cancel")


def commit_and_save(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    commit(context, match)
    save(context, match)
    return ModeResult(consumed=True, switch_to="normal", message="save")


__all__ = [
    "newline",
    "backspace",
    "delete_forward",
    "indent",
    "commit",
    "cancel",
    "commit_and_save",
]
