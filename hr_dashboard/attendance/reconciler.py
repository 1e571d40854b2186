"""Attendance reconciler — read-time merge of attendance rows with leave overlay.

Pure functions only; nothing here writes to the record store. Approved leave
supersedes whatever status the store holds for a covered day.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterable, Optional, Sequence, Union

from hr_dashboard.attendance.schemas import AttendanceSummary, ReconciledDay
from hr_dashboard.common.clock import day_key, today as current_day
from hr_dashboard.common.constants import AttendanceStatus
from hr_dashboard.leave.overlay import approved_leaves, is_on_leave
from hr_dashboard.record_store.schemas import AttendanceRecord, LeaveRequest

logger = logging.getLogger(__name__)

RecordLike = Union[AttendanceRecord, ReconciledDay]


def record_day(record: RecordLike) -> Optional[date]:
    """Calendar day a row belongs to: its date, else the day of its check-in."""
    if record.date is not None:
        return day_key(record.date)
    if record.check_in is not None:
        return day_key(record.check_in)
    return None


def reconcile(
    records: Iterable[RecordLike],
    leaves: Iterable[LeaveRequest],
) -> list[ReconciledDay]:
    """Apply the leave overlay to every row, preserving input order.

    Idempotent: reconciling already-reconciled rows against the same leaves
    yields the same statuses.
    """

    approved = approved_leaves(leaves)
    result: list[ReconciledDay] = []
    for record in records:
        day = record_day(record)
        if day is None:
            logger.warning("Skipping attendance row %s without date or check-in", record.id)
            continue

        on_leave = is_on_leave(day, approved)
        result.append(
            ReconciledDay(
                id=record.id,
                emp_id=record.emp_id,
                emp_name=record.emp_name,
                date=day,
                status=AttendanceStatus.leave if on_leave else record.status,
                check_in=record.check_in,
                check_out=record.check_out,
                work_mode=record.work_mode,
                work_hours=record.work_hours,
            )
        )
    return result


def today_record(
    days: Iterable[ReconciledDay],
    today: Optional[date] = None,
) -> Optional[ReconciledDay]:
    """The row for the current reporting-timezone day, if any."""
    target = today or current_day()
    return next((d for d in days if d.date == target), None)


def sort_for_display(days: Iterable[ReconciledDay]) -> list[ReconciledDay]:
    """Most recent first; stable for rows sharing a date."""
    return sorted(days, key=lambda d: d.date, reverse=True)


def filter_by_day(days: Iterable[ReconciledDay], day: date) -> list[ReconciledDay]:
    return [d for d in days if d.date == day]


def summarize(days: Sequence[ReconciledDay]) -> AttendanceSummary:
    """Count statuses and the present rate (percentage, halves round up)."""

    total = len(days)
    present = sum(1 for d in days if d.status == AttendanceStatus.present)
    leave = sum(1 for d in days if d.status == AttendanceStatus.leave)
    absent = sum(1 for d in days if d.status == AttendanceStatus.absent)
    rate = math.floor(present / total * 100 + 0.5) if total else 0

    return AttendanceSummary(
        total=total,
        present=present,
        leave=leave,
        absent=absent,
        rate=rate,
    )
