"""The single yank/delete register."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

RegisterKind = Literal["character", "line"]


@dataclass(frozen=True, slots=True)
class RegisterValue:
    """Register payload.

    Line-wise values hold whole lines joined by ``"\\n"`` with no trailing
    newline; character-wise values may span line breaks.
    """

    text: str
    kind: RegisterKind = "character"

    @property
    def linewise(self) -> bool:
        return self.kind == "line"

    def lines(self) -> Tuple[str, ...]:
        return tuple(self.text.split("\n"))


class Register:
    """Holds the most recent yank or delete; every store overwrites it."""

    def __init__(self) -> None:
        self._value: Optional[RegisterValue] = None

    def store(self, text: str, *, kind: RegisterKind = "character") -> RegisterValue:
        self._value = RegisterValue(text=text, kind=kind)
        return self._value

    def get(self) -> Optional[RegisterValue]:
        return self._value

    def is_empty(self) -> bool:
        return self._value is None

    def clear(self) -> None:
        self._value = None


__all__ = ["Register", "RegisterKind", "RegisterValue"]
