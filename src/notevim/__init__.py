"""Modal editing engine for terminal notes."""

from .engine import NoteEditor

__all__ = [
    "NoteEditor",
    "actions",
    "adapters",
    "buffer",
    "config",
    "keymaps",
    "modes",
    "motions",
    "runtime",
]

__version__ = "0.1.0"
