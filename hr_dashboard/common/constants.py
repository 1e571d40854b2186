"""Enums and constants for the HR dashboard — matching the record store's values."""

from __future__ import annotations

import enum


class _CaseInsensitiveEnum(str, enum.Enum):
    """Accept values regardless of case (the store emits both APPROVED and Approved)."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return None


# ── Attendance ──────────────────────────────────────────────────────

class AttendanceStatus(_CaseInsensitiveEnum):
    present = "Present"
    absent = "Absent"
    leave = "Leave"
    # Synthetic: weekend day with no record, timesheet only
    weekoff = "Weekoff"


class WorkMode(_CaseInsensitiveEnum):
    office = "Office"
    wfh = "WFH"


class GateState(str, enum.Enum):
    no_record = "NoRecord"
    checked_in = "CheckedIn"
    checked_out = "CheckedOut"
    on_leave = "OnLeave"


# ── Leave ───────────────────────────────────────────────────────────

class LeaveStatus(_CaseInsensitiveEnum):
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"
    cancelled = "Cancelled"


# ── Misc constants ──────────────────────────────────────────────────

DATE_FORMAT = "%d/%m/%Y"          # Indian format: 10/06/2024
TIME_FORMAT = "%I:%M %p"          # 09:00 AM
WEEKEND_DAYS = (5, 6)             # date.weekday(): Saturday, Sunday
DAYS_PER_WEEK = 7
MAX_TIMESHEET_WEEKS = 52
MISSING_VALUE = "-"

EXPORT_COLUMNS: tuple[str, ...] = (
    "Date",
    "Check In",
    "Check Out",
    "Hours",
    "Status",
    "Work Mode",
)
