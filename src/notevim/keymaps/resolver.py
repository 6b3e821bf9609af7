"""Incremental key resolution for modal dispatch.

Modes feed keys one at a time together with the keys they are already
holding. Each mode's bindings are compiled into a :class:`ModeKeymap`: a
table of complete sequences plus a table of strict prefixes and the keys
that may follow them. Held prefixes never expire. When a new key leaves
every sequence the held keys are dropped and the new key is tried on its
own, so ``g`` followed by ``j`` still moves down. A key that resolves to
nothing is a miss; Insert mode types it, the operator modes cancel and
hand it back to the mode manager.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Literal, Optional, Sequence

from notevim.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry

Tokens = tuple[str, ...]


@dataclass(slots=True)
class ModeKeymap:
    """Lookup tables for one mode, rebuilt whenever the registry changes."""

    mode: str
    revision: int = 0
    sequences: Dict[Tokens, Binding] = field(default_factory=dict)
    continuations: Dict[Tokens, set[str]] = field(default_factory=dict)

    @classmethod
    def build(
        cls, mode: str, bindings: Iterable[Binding], *, revision: int = 0
    ) -> "ModeKeymap":
        keymap = cls(mode=mode, revision=revision)
        for binding in bindings:
            tokens = binding.tokens
            keymap.sequences[tokens] = binding
            for size in range(1, len(tokens)):
                keymap.continuations.setdefault(tokens[:size], set()).add(
                    tokens[size]
                )
        return keymap

    def expecting(self, held: Tokens) -> Tokens:
        return tuple(sorted(self.continuations.get(held, ())))


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """What to run and what to keep holding after one key.

    ``held`` is the prefix the mode should keep for the next key and
    ``expecting`` the keys that would extend it. ``dropped`` lists held keys
    discarded because the new key diverged from them.
    """

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    held: Tokens = ()
    expecting: Tokens = ()
    dropped: Tokens = ()


class KeymapResolver:
    """Resolves keys against per-mode tables built from a registry."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._keymaps: Dict[str, ModeKeymap] = {}

    def resolve(
        self, mode: str, held: Sequence[str], token: str
    ) -> ResolutionResult:
        """Resolve ``token`` pressed in ``mode`` while ``held`` keys wait."""

        held = tuple(held)
        keymap = self.keymap(mode)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "held": len(held), "token": token},
        ) as handle:
            result = self._step(keymap, held + (token,))
            if result.status == "miss" and held:
                result = replace(self._step(keymap, (token,)), dropped=held)
                handle.add_metadata("dropped", " ".join(held))
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("binding_id", result.match.binding.id)
            return result

    def keymap(self, mode: str) -> ModeKeymap:
        revision = self._registry.revision()
        keymap = self._keymaps.get(mode)
        if keymap is None or keymap.revision != revision:
            keymap = ModeKeymap.build(
                mode, self._registry.iter_bindings(mode), revision=revision
            )
            self._keymaps[mode] = keymap
        return keymap

    def _step(self, keymap: ModeKeymap, tokens: Tokens) -> ResolutionResult:
        binding = keymap.sequences.get(tokens)
        if binding is not None:
            action = self._registry.get_action(binding.action_id)
            return ResolutionResult(
                status="match", match=ResolutionMatch(binding=binding, action=action)
            )
        if tokens in keymap.continuations:
            return ResolutionResult(
                status="pending", held=tokens, expecting=keymap.expecting(tokens)
            )
        return ResolutionResult(status="miss")


__all__ = [
    "KeymapResolver",
    "ModeKeymap",
    "ResolutionResult",
    "ResolutionMatch",
]
