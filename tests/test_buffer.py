from __future__ import annotations

import pytest

from notevim.buffer import (
    Buffer,
    BufferDocument,
    ListPrefix,
    OutOfRange,
    Register,
    clamp_position,
    split_lines,
)


def test_split_lines_keeps_trailing_empty_line() -> None:
    assert split_lines("") == [""]
    assert split_lines("a\n") == ["a", ""]
    assert split_lines("a\r\nb\rc") == ["a", "b", "c"]


def test_document_never_empty() -> None:
    document = BufferDocument.from_text("")

    assert document.line_count == 1
    assert document.is_empty()

    document.delete((0, 0), (0, 0))
    assert document.line_count == 1


def test_document_insert_multiline_returns_end() -> None:
    document = BufferDocument.from_text("head tail")

    end = document.insert((0, 5), "one\ntwo\n")

    assert document.snapshot() == ("head one", "two", "tail")
    assert end == (2, 0)
    assert document.dirty is True


def test_document_delete_across_lines_merges() -> None:
    document = BufferDocument.from_text("alpha\nbeta\ngamma")

    removed = document.delete((1, 4), (0, 2))

    assert removed == "pha\nbeta"
    assert document.snapshot() == ("al", "gamma")


def test_document_rejects_out_of_range_positions() -> None:
    document = BufferDocument.from_text("abc")

    with pytest.raises(OutOfRange):
        document.insert((1, 0), "x")
    with pytest.raises(OutOfRange):
        document.get_text((0, 0), (0, 4))


def test_document_version_increases_on_mutation() -> None:
    document = BufferDocument.from_text("abc")
    version = document.version

    document.insert((0, 3), "d")
    document.insert_lines(1, ["e"])

    assert document.version == version + 2
    with pytest.raises(IndexError):
        document.insert_lines(5, ["x"])


def test_clamp_position_stays_inside_document() -> None:
    document = BufferDocument.from_text("ab\nc")

    assert clamp_position(document, 9, 9) == (1, 1)
    assert clamp_position(document, -1, -3) == (0, 0)


def test_transaction_records_single_undo_entry() -> None:
    buffer = Buffer.from_text("abc")

    with buffer.transaction("edit"):
        buffer.insert_text("x", at=(0, 0))
        buffer.insert_text("y", at=(0, 1))

    assert buffer.text() == "xyabc"
    assert len(buffer.undo_timeline) == 1
    assert buffer.undo() is True
    assert buffer.text() == "abc"
    assert buffer.redo() is True
    assert buffer.text() == "xyabc"


def test_transaction_without_change_records_nothing() -> None:
    buffer = Buffer.from_text("abc")

    with buffer.transaction("noop"):
        buffer.set_cursor(0, 2)

    assert len(buffer.undo_timeline) == 0
    assert buffer.undo() is False


def test_transaction_rolls_back_on_error() -> None:
    buffer = Buffer.from_text("abc")

    with pytest.raises(OutOfRange):
        with buffer.transaction("broken"):
            buffer.insert_text("x", at=(0, 0))
            buffer.delete_range((0, 0), (3, 0))

    assert buffer.text() == "abc"
    assert buffer.dirty is False
    assert not buffer.in_transaction


def test_session_rollback_restores_cursor() -> None:
    buffer = Buffer.from_text("one\ntwo")
    buffer.set_cursor(1, 2)
    session = buffer.begin_session("insert")

    buffer.insert_lines(2, [""])
    buffer.set_cursor(2, 0)
    buffer.insert_text("three")
    session.rollback()

    assert buffer.lines() == ("one", "two")
    assert buffer.cursor == (1, 2)
    assert len(buffer.undo_timeline) == 0


def test_new_edit_after_undo_drops_redo_tail() -> None:
    buffer = Buffer.from_text("a")
    buffer.insert_text("b", at=(0, 1))
    buffer.insert_text("c", at=(0, 2))

    buffer.undo()
    buffer.insert_text("d", at=(0, 2))

    assert buffer.text() == "abd"
    assert buffer.redo() is False


def test_undo_restores_cursor_of_the_edit() -> None:
    buffer = Buffer.from_text("hello")
    buffer.set_cursor(0, 3)

    buffer.delete_range((0, 3), (0, 5))
    buffer.set_cursor(0, 0)
    buffer.undo()

    assert buffer.text() == "hello"
    assert buffer.cursor == (0, 3)


def test_dirty_tracks_clean_baseline() -> None:
    buffer = Buffer.from_text("abc")
    assert buffer.dirty is False

    buffer.insert_text("x", at=(0, 3))
    assert buffer.dirty is True

    buffer.undo()
    assert buffer.dirty is False

    buffer.redo()
    buffer.mark_clean()
    assert buffer.dirty is False
    buffer.undo()
    assert buffer.dirty is True


def test_load_resets_history_but_keeps_register() -> None:
    buffer = Buffer.from_text("abc")
    buffer.insert_text("x")
    buffer.register.store("kept")

    buffer.load("fresh\ntext")

    assert buffer.lines() == ("fresh", "text")
    assert buffer.cursor == (0, 0)
    assert buffer.undo() is False
    assert buffer.dirty is False
    value = buffer.register.get()
    assert value is not None and value.text == "kept"


def test_load_keeps_version_increasing() -> None:
    buffer = Buffer.from_text("abc")
    buffer.insert_text("x")
    before = buffer.document.version

    buffer.load("fresh")

    assert buffer.document.version == before + 1
    assert buffer.dirty is False


def test_buffer_is_empty_follows_document() -> None:
    buffer = Buffer.from_text("")
    assert buffer.is_empty() is True

    buffer.insert_text("a")
    assert buffer.is_empty() is False

    buffer.load("\n")
    assert buffer.is_empty() is False
    buffer.load("")
    assert buffer.is_empty() is True


def test_register_overwrites_previous_value() -> None:
    register = Register()
    assert register.is_empty()

    register.store("a\nb", kind="line")
    register.store("c")

    value = register.get()
    assert value is not None
    assert value.text == "c"
    assert value.linewise is False


@pytest.mark.parametrize(
    ("line", "kind", "continuation"),
    [
        ("- item", "bullet", "- "),
        ("  * nested", "bullet", "  * "),
        ("- [x] done", "task", "- [ ] "),
        ("9. ninth", "ordered", "10. "),
    ],
)
def test_list_prefix_continuation(line: str, kind: str, continuation: str) -> None:
    prefix = ListPrefix.detect(line)

    assert prefix is not None
    assert prefix.kind == kind
    assert prefix.continuation() == continuation
    assert not prefix.is_empty_item(line)


def test_list_prefix_empty_item_and_plain_text() -> None:
    prefix = ListPrefix.detect("- ")

    assert prefix is not None
    assert prefix.is_empty_item("- ")
    assert ListPrefix.detect("plain text") is None
    assert ListPrefix.detect("-not a list") is None
