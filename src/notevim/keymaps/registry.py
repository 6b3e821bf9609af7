"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator

from notevim.runtime.telemetry import span

from .models import ActionRef, Binding

Tokens = tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding collides with or shadows another in its mode.

    Sequences never time out, so a bound key cannot also start a longer
    sequence in the same mode: the shorter one would always fire first.
    """

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' ({binding.key_signature}) conflicts with "
            f"{[b.id for b in self.conflicts]}"
        )


def _starts_with(tokens: Tokens, prefix: Tokens) -> bool:
    return tokens[: len(prefix)] == prefix


class KeymapRegistry:
    """Owns action references and the per-mode key index.

    Each mode maps a key sequence to exactly one binding. ``revision`` bumps
    on every change so resolvers know to rebuild their tables.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_keys: Dict[str, Dict[Tokens, str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` whatever it collides with is dropped."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            self._require_action(binding)
            existing = self._bindings.get(binding.id)
            if existing is not None and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")
            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(binding, conflicts)

            for stale in [*conflicts, *([existing] if existing else [])]:
                self._drop(stale)
            self._bindings[binding.id] = binding
            self._by_keys.setdefault(binding.mode, {})[binding.tokens] = binding.id
            self._revision += 1
            return binding

    def iter_bindings(self, mode: str) -> Iterator[Binding]:
        keys = self._by_keys.get(mode, {})
        for tokens in sorted(keys):
            yield self._bindings[keys[tokens]]

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        """Bindings in the same mode whose keys equal, extend or prefix ``binding``'s."""

        tokens = binding.tokens
        return [
            self._bindings[other_id]
            for other, other_id in sorted(self._by_keys.get(binding.mode, {}).items())
            if other_id != binding.id
            and (_starts_with(other, tokens) or _starts_with(tokens, other))
        ]

    def _require_action(self, binding: Binding) -> None:
        if binding.action_id not in self._actions:
            raise KeyError(
                f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
            )

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        keys = self._by_keys.get(binding.mode)
        if keys is not None and keys.get(binding.tokens) == binding.id:
            del keys[binding.tokens]


__all__ = ["KeymapRegistry", "KeymapConflictError"]
