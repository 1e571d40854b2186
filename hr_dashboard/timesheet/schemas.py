"""Timesheet Pydantic v2 schemas — weekly cells and week-range listings."""


from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_dashboard.common.clock import WeekRange
from hr_dashboard.common.constants import AttendanceStatus, WorkMode


class TimesheetCell(BaseModel):
    """One day of a Monday–Sunday timesheet."""

    model_config = ConfigDict(frozen=True)

    date: date
    weekday: str
    status: AttendanceStatus
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    work_mode: Optional[WorkMode] = None
    hours: float = Field(0.0, ge=0)


class WeekListResponse(BaseModel):
    """Selectable week ranges, most recent first."""

    weeks: list[WeekRange]


class TimesheetResponse(BaseModel):
    """An employee's 7-cell week plus totals."""

    emp_id: str
    week: WeekRange
    cells: list[TimesheetCell]
    total_hours: float = 0.0
    degraded: bool = False
