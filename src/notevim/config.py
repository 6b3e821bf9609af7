"""Editor settings and mode indicator styling."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from notevim.runtime.telemetry import ENV_PREFIX


def _read(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(f"{ENV_PREFIX}{name}")


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _read(env, name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EditorConfig:
    """Tunables for Insert-mode editing."""

    tab_width: int = 4
    expand_tabs: bool = True
    list_continuation: bool = True

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            raise ValueError("tab_width must be at least 1")

    @property
    def indent(self) -> str:
        return " " * self.tab_width if self.expand_tabs else "\t"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        source = os.environ if env is None else env
        width = _read(source, "TAB_WIDTH")
        return cls(
            tab_width=int(width) if width else cls.tab_width,
            expand_tabs=_flag(source, "EXPAND_TABS", cls.expand_tabs),
            list_continuation=_flag(
                source, "LIST_CONTINUATION", cls.list_continuation
            ),
        )


@dataclass(frozen=True)
class ModeStyle:
    """Label, border color and key hint shown for a mode."""

    label: str
    color: str
    hint: str


MODE_STYLES = {
    "normal": ModeStyle("NORMAL", "#61AFEF", "Ctrl+S: Save, Esc: Exit"),
    "insert": ModeStyle("INSERT", "#98C379", "Ctrl+S: Save, Esc: Exit"),
    "visual": ModeStyle("VISUAL", "#C678DD", "y: Yank, d: Delete, Esc: Cancel"),
    "operator_pending": ModeStyle(
        "NORMAL d-", "#E5C07B", "d: Line, w: Word→, b: Word←"
    ),
    "delete_confirm": ModeStyle("NORMAL [DEL]", "#E06C75", "d: Confirm, Esc: Cancel"),
}


def style_for(mode: str) -> ModeStyle:
    return MODE_STYLES.get(mode, MODE_STYLES["normal"])


__all__ = ["EditorConfig", "ModeStyle", "MODE_STYLES", "style_for"]
