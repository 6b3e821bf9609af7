"""Editor modes and the dispatch loop that drives them."""

from .base_mode import (
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    Pending,
    PendingDelete,
    PendingOperator,
)
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .visual_mode import VisualMode
from .operator_pending_mode import DeleteConfirmMode, OperatorPendingMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "Pending",
    "PendingDelete",
    "PendingOperator",
    "NormalMode",
    "InsertMode",
    "VisualMode",
    "OperatorPendingMode",
    "DeleteConfirmMode",
]
