"""Markdown list-marker detection used when splitting lines in Insert mode."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Optional

_TASK = re.compile(r"^(?P<indent>\s*)(?P<marker>[-*+]) \[[ xX]\] ")
_BULLET = re.compile(r"^(?P<indent>\s*)(?P<marker>[-*+]) ")
_ORDERED = re.compile(r"^(?P<indent>\s*)(?P<number>\d+)\. ")


@dataclass(frozen=True, slots=True)
class ListPrefix:
    """Marker found at the start of a markdown list item."""

    kind: Literal["bullet", "task", "ordered"]
    indent: str
    marker: str
    length: int

    @classmethod
    def detect(cls, line: str) -> Optional["ListPrefix"]:
        match = _TASK.match(line)
        if match:
            return cls("task", match["indent"], match["marker"], match.end())
        match = _BULLET.match(line)
        if match:
            return cls("bullet", match["indent"], match["marker"], match.end())
        match = _ORDERED.match(line)
        if match:
            return cls("ordered", match["indent"], match["number"], match.end())
        return None

    def is_empty_item(self, line: str) -> bool:
        return len(line) <= self.length

    def continuation(self) -> str:
        if self.kind == "task":
            return f"{self.indent}{self.marker} [ ] "
        if self.kind == "ordered":
            return f"{self.indent}{int(self.marker) + 1}. "
        return f"{self.indent}{self.marker} "


__all__ = ["ListPrefix"]
