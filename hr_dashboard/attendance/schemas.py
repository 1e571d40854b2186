"""Attendance Pydantic v2 schemas — derived views and request bodies.

Naming conventions:
  - *Request            → request bodies (write)
  - *Response           → response bodies (read)
  - ReconciledDay / *Summary → derived, immutable read representations
"""


from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from hr_dashboard.common.constants import (
    EXPORT_COLUMNS,
    AttendanceStatus,
    GateState,
    WorkMode,
)


# ═════════════════════════════════════════════════════════════════════
# Reconciled view
# ═════════════════════════════════════════════════════════════════════


class ReconciledDay(BaseModel):
    """An attendance row with leave overlay applied. Never persisted."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: Optional[Union[int, str]] = None
    emp_id: str
    emp_name: Optional[str] = None
    date: date
    status: AttendanceStatus
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    work_mode: Optional[WorkMode] = None
    work_hours: Optional[float] = None


class AttendanceSummary(BaseModel):
    """Status counts for a set of reconciled rows."""

    total: int = 0
    present: int = 0
    leave: int = 0
    absent: int = 0
    rate: int = Field(0, description="Present as a whole-number percentage of total")


# ═════════════════════════════════════════════════════════════════════
# Gate
# ═════════════════════════════════════════════════════════════════════


class GateStatus(BaseModel):
    """Which of check-in / check-out is currently permitted."""

    model_config = ConfigDict(frozen=True)

    state: GateState
    can_check_in: bool
    can_check_out: bool
    on_leave: bool = False
    loaded: bool = True


class CheckInRequest(BaseModel):
    """Payload for checking in."""

    work_mode: WorkMode = WorkMode.office
    emp_name: Optional[str] = Field(None, max_length=200)


# ═════════════════════════════════════════════════════════════════════
# Responses
# ═════════════════════════════════════════════════════════════════════


class AttendanceViewResponse(BaseModel):
    """An employee's reconciled history plus today's gate."""

    emp_id: str
    today: date
    records: list[ReconciledDay]
    today_record: Optional[ReconciledDay] = None
    on_leave_today: bool = False
    gate: GateStatus
    summary: AttendanceSummary
    degraded: bool = Field(
        False, description="True when a record store read failed and was treated as empty",
    )


class DailyAttendanceResponse(BaseModel):
    """All employees' rows for one calendar day (roster view)."""

    day: date
    records: list[ReconciledDay]
    summary: AttendanceSummary
    degraded: bool = False


class ExportRowsResponse(BaseModel):
    """Row data handed to CSV/PDF exporters, already in display order."""

    columns: list[str] = Field(default_factory=lambda: list(EXPORT_COLUMNS))
    rows: list[list[str]]
