"""Textual host for the note editor engine."""

from .controller import TextualUIHooks, TextualVimAdapter, normalize_textual_key

__all__ = ["TextualUIHooks", "TextualVimAdapter", "normalize_textual_key"]
