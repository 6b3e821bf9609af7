"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple, Union

from notevim.buffer import Buffer, Transaction
from notevim.buffer.sync import Range

if TYPE_CHECKING:
    from notevim.config import EditorConfig


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``text`` carries the printable character for keys that produce one; named
    keys (``ESC``, ``ENTER``, ``BACKSPACE``...) leave it ``None``.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def printable(self) -> Optional[str]:
        if self.modifiers and self.modifiers != ("shift",):
            return None
        if self.text is not None:
            return self.text if self.text.isprintable() else None
        if len(self.key) == 1 and self.key.isprintable():
            return self.key
        return None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``.

    ``redispatch`` asks the manager to feed the same key once more to the mode
    that is active after ``switch_to`` has been applied.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    redispatch: bool = False


@dataclass(frozen=True, slots=True)
class PendingOperator:
    """Operator key pressed in Normal mode, awaiting its target."""

    operator: str


@dataclass(frozen=True, slots=True)
class PendingDelete:
    """Computed delete target awaiting confirmation."""

    operator: str
    target: str
    range: Range
    linewise: bool = False


Pending = Union[PendingOperator, PendingDelete]


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access.

    ``pending`` is the tagged multi-key state consumed by the operator modes;
    ``session`` is the open Insert transaction, if any; ``count`` is the
    numeric prefix typed in Normal mode.
    """

    buffer: Buffer
    bus: "ModeBus"
    config: Optional["EditorConfig"] = None
    pending: Optional[Pending] = None
    session: Optional[Transaction] = None
    count: Optional[int] = None
    extras: Dict[str, object] = field(default_factory=dict)

    def take_count(self, default: int = 1) -> int:
        count = self.count
        self.count = None
        return count if count else default


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
