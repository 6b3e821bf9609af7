"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, KeySequence, KeyStroke, make_token
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ModeKeymap, ResolutionMatch, ResolutionResult
from .defaults import load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "make_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ModeKeymap",
    "ResolutionResult",
    "ResolutionMatch",
    "load_default_keymaps",
]
