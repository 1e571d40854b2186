"""Check-in / check-out gate — per-employee, per-day permission state machine.

    NoRecord ──check_in──▶ CheckedIn ──check_out──▶ CheckedOut (terminal)

OnLeave is evaluated first and disables both transitions whatever the
underlying record says. Guards run before any record store call; the store
does not enforce idempotent check-in, so a rejected action must never
reach it.
"""

from __future__ import annotations

from typing import Optional

from hr_dashboard.attendance.schemas import GateStatus, ReconciledDay
from hr_dashboard.common.constants import GateState
from hr_dashboard.common.exceptions import GateViolation

UNAVAILABLE_STATE = "Unavailable"


def gate_state(record: Optional[ReconciledDay], on_leave: bool) -> GateState:
    """Derive the state from today's reconciled row and the leave flag."""

    if on_leave:
        return GateState.on_leave
    if record is None or (record.check_in is None and record.check_out is None):
        return GateState.no_record
    if record.check_in is not None and record.check_out is None:
        return GateState.checked_in
    return GateState.checked_out


def evaluate_gate(
    record: Optional[ReconciledDay],
    on_leave: bool,
    *,
    loaded: bool = True,
) -> GateStatus:
    """Build the gate for today.

    ``loaded=False`` means a read behind this view failed; with today's
    state unknown, nothing is permitted.
    """

    state = gate_state(record, on_leave)
    return GateStatus(
        state=state,
        can_check_in=loaded and state == GateState.no_record,
        can_check_out=loaded and state == GateState.checked_in,
        on_leave=on_leave,
        loaded=loaded,
    )


def _reported_state(gate: GateStatus) -> str:
    return gate.state.value if gate.loaded else UNAVAILABLE_STATE


def ensure_can_check_in(gate: GateStatus) -> None:
    if not gate.can_check_in:
        raise GateViolation("check in", _reported_state(gate))


def ensure_can_check_out(gate: GateStatus) -> None:
    if not gate.can_check_out:
        raise GateViolation("check out", _reported_state(gate))
