"""Dataclasses describing keymap bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIER_NAMES = frozenset({"ctrl", "alt", "shift", "meta"})


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def make_token(key: str, modifiers: Iterable[str] = ()) -> str:
    """Canonical token for ``key`` pressed with ``modifiers`` (``ctrl+r``)."""

    normalized = normalize_modifiers(modifiers)
    if normalized:
        return "+".join(normalized) + f"+{key}"
    return key


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press used by key sequences."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @classmethod
    def parse(cls, spec: str) -> "KeyStroke":
        """Parse ``"ctrl+r"``-style specs; a lone ``"+"`` is the plus key."""

        parts = spec.split("+")
        if len(parts) > 1 and all(p.lower() in MODIFIER_NAMES for p in parts[:-1]):
            if parts[-1]:
                return cls(parts[-1], tuple(parts[:-1]))
        return cls(spec)

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable collection of keystrokes."""

    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(strokes=tuple(KeyStroke.parse(key) for key in keys if key))


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence in one mode with an action."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def tokens(self) -> tuple[str, ...]:
        return self.sequence.tokens

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "KeyStroke",
    "KeySequence",
    "ActionRef",
    "Binding",
    "make_token",
    "normalize_modifiers",
]
