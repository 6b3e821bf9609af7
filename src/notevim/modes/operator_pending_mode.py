"""Operator-pending and delete-confirm modes.

Both hold their state in ``ModeContext.pending``. Any key without a binding
cancels the pending operation and is handed back to Normal mode.
"""

from __future__ import annotations

from notevim.runtime import telemetry

from .base_mode import KeyInput, ModeContext, ModeResult, PendingDelete, PendingOperator
from .keymap_helpers import KeymapMode


def cancel_pending(
    context: ModeContext, *, message: str, redispatch: bool = False
) -> ModeResult:
    """Drop the pending operation and return to Normal mode.

    With ``redispatch`` the key is left unconsumed so the manager feeds it to
    Normal mode.
    """

    pending = context.pending
    context.pending = None
    telemetry.record_event(
        "operator.cancel",
        data={"reason": message, "pending": type(pending).__name__},
    )
    return ModeResult(
        consumed=not redispatch,
        switch_to="normal",
        status="cancelled",
        message=message,
        redispatch=redispatch,
    )


class OperatorPendingMode(KeymapMode):
    name = "operator_pending"

    def on_enter(self, previous: str | None) -> None:
        del previous
        if not isinstance(self.context.pending, PendingOperator):
            raise RuntimeError("operator_pending entered without a pending operator")

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        if next_mode != DeleteConfirmMode.name:
            self.context.pending = None

    def on_unmapped(self, key: KeyInput) -> ModeResult:
        del key
        return cancel_pending(self.context, message="redispatch", redispatch=True)


class DeleteConfirmMode(KeymapMode):
    """Shows the computed range until the operator key confirms it."""

    name = "delete_confirm"

    def on_enter(self, previous: str | None) -> None:
        del previous
        pending = self.context.pending
        if not isinstance(pending, PendingDelete):
            raise RuntimeError("delete_confirm entered without a pending delete")
        self.context.bus.emit(
            "operator.pending",
            {"target": pending.target, "range": pending.range},
        )

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.context.pending = None

    def on_unmapped(self, key: KeyInput) -> ModeResult:
        del key
        return cancel_pending(self.context, message="redispatch", redispatch=True)
