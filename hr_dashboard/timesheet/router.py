"""Timesheet router — week ranges and weekly timesheet views."""


from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from hr_dashboard.config import settings
from hr_dashboard.dependencies import get_record_store
from hr_dashboard.record_store.client import RecordStoreClient
from hr_dashboard.timesheet.schemas import TimesheetResponse, WeekListResponse
from hr_dashboard.timesheet.service import TimesheetService

router = APIRouter(prefix="", tags=["timesheet"])


# ── GET /weeks ──────────────────────────────────────────────────────

@router.get("/weeks", response_model=WeekListResponse)
async def list_weeks(
    count: Optional[int] = Query(None, ge=1, description="Number of weeks, most recent first"),
):
    """Selectable Monday–Sunday ranges ending with the current week."""
    return TimesheetService.list_weeks(count or settings.TIMESHEET_WEEKS)


# ── GET /employees/{emp_id} ─────────────────────────────────────────

@router.get("/employees/{emp_id}", response_model=TimesheetResponse)
async def employee_timesheet(
    emp_id: str,
    week: Optional[int] = Query(None, ge=0, description="0 = current week, 1 = previous, ..."),
    start: Optional[date] = Query(None, description="Any day inside the wanted week"),
    store: RecordStoreClient = Depends(get_record_store),
):
    """Seven Monday→Sunday cells with status, times and hours."""
    week_range = TimesheetService.resolve_week(week_index=week, start=start)
    return await TimesheetService.get_week(store, emp_id, week_range)
