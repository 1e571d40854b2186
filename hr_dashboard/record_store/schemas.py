"""Record store Pydantic v2 schemas — wire shapes of the external REST backend.

Naming conventions:
  - snake_case attributes, camelCase aliases (``empId``, ``checkIn``, ...)
  - *Payload → request bodies sent to the store (write)
"""

import logging
from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from hr_dashboard.common.clock import as_utc, day_key
from hr_dashboard.common.constants import AttendanceStatus, LeaveStatus, WorkMode

logger = logging.getLogger(__name__)

# Statuses the store may hold; Weekoff only exists on timesheet cells
STORED_STATUSES = (AttendanceStatus.present, AttendanceStatus.absent, AttendanceStatus.leave)

# Bound before class bodies rebind the name `date` to a field default
OptionalDate = Optional[date]


class StoreModel(BaseModel):
    """Base for shapes exchanged with the record store."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_store(self) -> dict[str, Any]:
        """Serialize with the store's camelCase names, dropping unset optionals."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


def _to_str_id(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


# ═════════════════════════════════════════════════════════════════════
# Attendance
# ═════════════════════════════════════════════════════════════════════


class AttendanceRecord(StoreModel):
    """One check-in row per (employee, day), as held by the store."""

    id: Optional[Union[int, str]] = None
    emp_id: str
    emp_name: Optional[str] = None
    date: OptionalDate = None
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    status: AttendanceStatus = AttendanceStatus.absent
    work_mode: Optional[WorkMode] = None
    work_hours: Optional[float] = Field(None, ge=0)

    @field_validator("emp_id", mode="before")
    @classmethod
    def _coerce_emp_id(cls, v: Any) -> Any:
        return _to_str_id(v)

    @field_validator("date", mode="before")
    @classmethod
    def _bucket_date(cls, v: Any) -> Any:
        # The store sometimes sends the day as a full timestamp
        if v is None or v == "":
            return None
        return day_key(v) if isinstance(v, (str, date)) else v

    @field_validator("check_in", "check_out")
    @classmethod
    def _normalise_instant(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, v: Any, info: ValidationInfo) -> Any:
        """Unknown or timesheet-only statuses fall back to what the times show.

        Dropping the row instead would hide today's check-in from the gate.
        """
        if v is None or v == "":
            return AttendanceStatus.absent
        try:
            status = AttendanceStatus(v)
        except ValueError:
            status = None
        if status in STORED_STATUSES:
            return status
        fallback = (
            AttendanceStatus.present
            if info.data.get("check_in") is not None
            else AttendanceStatus.absent
        )
        logger.warning("Unrecognised attendance status %r, using %s", v, fallback.value)
        return fallback

    @field_validator("work_mode", mode="before")
    @classmethod
    def _known_work_mode(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        try:
            return WorkMode(v)
        except ValueError:
            logger.warning("Unrecognised work mode %r, leaving it unset", v)
            return None


class CheckInPayload(StoreModel):
    """Body for ``POST /attendance/checkin``."""

    emp_id: str
    emp_name: Optional[str] = None
    date: date
    check_in: datetime
    work_mode: WorkMode = WorkMode.office
    status: AttendanceStatus = AttendanceStatus.present


class CheckOutPayload(StoreModel):
    """Body for ``PATCH /attendance/checkout/{id}``."""

    check_out: datetime
    status: AttendanceStatus = AttendanceStatus.present


# ═════════════════════════════════════════════════════════════════════
# Leave
# ═════════════════════════════════════════════════════════════════════


class LeaveRequest(StoreModel):
    """An inclusive leave interval. Only approved ones affect attendance."""

    id: Optional[Union[int, str]] = None
    emp_id: str
    emp_name: Optional[str] = None
    from_date: date
    to_date: date
    status: LeaveStatus = LeaveStatus.pending
    leave_type: Optional[str] = None
    reason: Optional[str] = None

    @field_validator("emp_id", mode="before")
    @classmethod
    def _coerce_emp_id(cls, v: Any) -> Any:
        return _to_str_id(v)

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def _bucket_dates(cls, v: Any) -> Any:
        return day_key(v) if isinstance(v, (str, datetime)) else v


class LeaveApplyPayload(StoreModel):
    """Body for ``POST /leave-approvel/apply``."""

    emp_id: str
    emp_name: Optional[str] = None
    from_date: date
    to_date: date
    leave_type: Optional[str] = None
    reason: Optional[str] = Field(None, max_length=500)
    status: LeaveStatus = LeaveStatus.pending

    @field_validator("emp_id", mode="before")
    @classmethod
    def _coerce_emp_id(cls, v: Any) -> Any:
        return _to_str_id(v)
