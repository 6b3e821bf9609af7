"""High-level editing verbs reused across modes."""

from . import core, insert, operators, visual
from .core import enter_insert_mode, move_cursor
from .visual import (
    cancel_selection,
    change_selection,
    delete_selection,
    extend,
    swap_anchor,
    yank_selection,
)

__all__ = [
    "core",
    "insert",
    "operators",
    "visual",
    "enter_insert_mode",
    "move_cursor",
    "cancel_selection",
    "change_selection",
    "delete_selection",
    "extend",
    "swap_anchor",
    "yank_selection",
]
