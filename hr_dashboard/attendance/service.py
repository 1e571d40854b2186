"""Attendance service layer — reconciled views, gated check-in/out, roster and export.

Business logic:
  - Load an employee's attendance + leave rows and reconcile them
  - Compute today's gate from that fresh view (never from cached state)
  - Check in / check out: guard → store write → reload → new gate
  - Daily roster across all employees, export rows in display order

Reads that hit StoreUnavailable degrade to an empty result and mark the
view ``degraded``; writes propagate every failure.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from hr_dashboard.attendance.export import export_rows
from hr_dashboard.attendance.gate import (
    ensure_can_check_in,
    ensure_can_check_out,
    evaluate_gate,
)
from hr_dashboard.attendance.reconciler import (
    filter_by_day,
    reconcile,
    sort_for_display,
    summarize,
    today_record,
)
from hr_dashboard.attendance.schemas import (
    AttendanceViewResponse,
    DailyAttendanceResponse,
    ExportRowsResponse,
)
from hr_dashboard.common import clock
from hr_dashboard.common.constants import WorkMode
from hr_dashboard.common.exceptions import ValidationException
from hr_dashboard.leave.overlay import is_on_leave
from hr_dashboard.record_store.client import RecordStoreClient, degrade_read
from hr_dashboard.record_store.schemas import CheckInPayload, CheckOutPayload, LeaveRequest

logger = logging.getLogger(__name__)


class AttendanceService:
    """Async attendance operations: view, gate, check in/out, roster, export."""

    # ── Read ────────────────────────────────────────────────────────

    @staticmethod
    async def load_view(
        store: RecordStoreClient,
        emp_id: str,
        *,
        today: Optional[date] = None,
    ) -> AttendanceViewResponse:
        """Fresh reconciled history and today's gate for one employee."""

        records, records_degraded = await degrade_read(
            store.list_attendance(emp_id), "list_attendance",
        )
        leaves, leaves_degraded = await degrade_read(
            store.list_leaves(emp_id), "list_leaves",
        )

        today = today or clock.today()
        days = sort_for_display(reconcile(records, leaves))
        current = today_record(days, today)
        on_leave = is_on_leave(today, leaves)
        degraded = records_degraded or leaves_degraded

        return AttendanceViewResponse(
            emp_id=emp_id,
            today=today,
            records=days,
            today_record=current,
            on_leave_today=on_leave,
            gate=evaluate_gate(current, on_leave, loaded=not degraded),
            summary=summarize(days),
            degraded=degraded,
        )

    # ── Check in ────────────────────────────────────────────────────

    @staticmethod
    async def check_in(
        store: RecordStoreClient,
        emp_id: str,
        *,
        work_mode: WorkMode = WorkMode.office,
        emp_name: Optional[str] = None,
    ) -> AttendanceViewResponse:
        """Create today's record. Rejected before any write unless the gate allows it."""

        view = await AttendanceService.load_view(store, emp_id)
        ensure_can_check_in(view.gate)

        now = clock.now()
        payload = CheckInPayload(
            emp_id=emp_id,
            emp_name=emp_name,
            date=clock.day_key(now),
            check_in=now,
            work_mode=work_mode,
        )
        await store.create_check_in(payload)
        logger.info("Employee %s checked in (%s)", emp_id, work_mode.value)

        return await AttendanceService.load_view(store, emp_id)

    # ── Check out ───────────────────────────────────────────────────

    @staticmethod
    async def check_out(
        store: RecordStoreClient,
        emp_id: str,
    ) -> AttendanceViewResponse:
        """Close today's record. Rejected before any write unless checked in."""

        view = await AttendanceService.load_view(store, emp_id)
        ensure_can_check_out(view.gate)

        record = view.today_record
        if record is None or record.id is None:
            raise ValidationException(
                {"check_out": ["No check-in record with an id was found for today."]}
            )

        await store.patch_check_out(record.id, CheckOutPayload(check_out=clock.now()))
        logger.info("Employee %s checked out", emp_id)

        return await AttendanceService.load_view(store, emp_id)

    # ── Roster (all employees, one day) ─────────────────────────────

    @staticmethod
    async def get_daily(
        store: RecordStoreClient,
        day: Optional[date] = None,
    ) -> DailyAttendanceResponse:
        """Every employee's row for *day*, each reconciled against their own leaves."""

        day = day or clock.today()
        records, degraded = await degrade_read(store.list_attendance(), "list_attendance")
        rows = filter_by_day(reconcile(records, []), day)

        leaves: list[LeaveRequest] = []
        for emp_id in dict.fromkeys(r.emp_id for r in rows):
            emp_leaves, leaves_degraded = await degrade_read(
                store.list_leaves(emp_id), "list_leaves",
            )
            leaves.extend(emp_leaves)
            degraded = degraded or leaves_degraded

        reconciled = []
        for row in rows:
            own = [leave for leave in leaves if leave.emp_id == row.emp_id]
            reconciled.extend(reconcile([row], own))

        return DailyAttendanceResponse(
            day=day,
            records=reconciled,
            summary=summarize(reconciled),
            degraded=degraded,
        )

    # ── Export ──────────────────────────────────────────────────────

    @staticmethod
    async def get_export_rows(
        store: RecordStoreClient,
        emp_id: str,
    ) -> ExportRowsResponse:
        """Export rows for an employee's full history, newest first."""

        view = await AttendanceService.load_view(store, emp_id)
        return export_rows(view.records)
