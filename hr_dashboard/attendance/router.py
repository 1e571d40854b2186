"""Attendance router — reconciled history, gate, check in/out, roster, export rows.

Authentication is handled by the hosting shell; routes take the employee id
from the path.
"""


from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from hr_dashboard.attendance.schemas import (
    AttendanceViewResponse,
    CheckInRequest,
    DailyAttendanceResponse,
    ExportRowsResponse,
    GateStatus,
)
from hr_dashboard.attendance.service import AttendanceService
from hr_dashboard.common.rate_limit import WRITE_LIMIT, limiter
from hr_dashboard.dependencies import get_record_store
from hr_dashboard.record_store.client import RecordStoreClient

router = APIRouter(prefix="", tags=["attendance"])


# ── GET /daily ──────────────────────────────────────────────────────

@router.get("/daily", response_model=DailyAttendanceResponse)
async def daily_attendance(
    day: Optional[date] = Query(None, description="Calendar day (defaults to today)"),
    store: RecordStoreClient = Depends(get_record_store),
):
    """All employees' rows for one day with a status summary (HR / manager view)."""
    return await AttendanceService.get_daily(store, day)


# ── GET /employees/{emp_id} ─────────────────────────────────────────

@router.get("/employees/{emp_id}", response_model=AttendanceViewResponse)
async def employee_attendance(
    emp_id: str,
    store: RecordStoreClient = Depends(get_record_store),
):
    """Reconciled attendance history, newest first, with today's gate."""
    return await AttendanceService.load_view(store, emp_id)


# ── GET /employees/{emp_id}/gate ────────────────────────────────────

@router.get("/employees/{emp_id}/gate", response_model=GateStatus)
async def employee_gate(
    emp_id: str,
    store: RecordStoreClient = Depends(get_record_store),
):
    """Which of check-in / check-out is currently permitted."""
    view = await AttendanceService.load_view(store, emp_id)
    return view.gate


# ── POST /employees/{emp_id}/check-in ───────────────────────────────

@router.post("/employees/{emp_id}/check-in", response_model=AttendanceViewResponse)
@limiter.limit(WRITE_LIMIT)
async def check_in(
    request: Request,
    emp_id: str,
    body: CheckInRequest,
    store: RecordStoreClient = Depends(get_record_store),
):
    """Check in for today. 409 when the gate does not permit it."""
    return await AttendanceService.check_in(
        store,
        emp_id,
        work_mode=body.work_mode,
        emp_name=body.emp_name,
    )


# ── POST /employees/{emp_id}/check-out ──────────────────────────────

@router.post("/employees/{emp_id}/check-out", response_model=AttendanceViewResponse)
@limiter.limit(WRITE_LIMIT)
async def check_out(
    request: Request,
    emp_id: str,
    store: RecordStoreClient = Depends(get_record_store),
):
    """Check out of today's record. 409 unless currently checked in."""
    return await AttendanceService.check_out(store, emp_id)


# ── GET /employees/{emp_id}/export-rows ─────────────────────────────

@router.get("/employees/{emp_id}/export-rows", response_model=ExportRowsResponse)
async def export_rows(
    emp_id: str,
    store: RecordStoreClient = Depends(get_record_store),
):
    """Rows for CSV/PDF export in display order (Date, Check In, Check Out, Hours, Status, Work Mode)."""
    return await AttendanceService.get_export_rows(store, emp_id)
