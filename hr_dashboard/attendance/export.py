"""Export row builder — the fixed column contract handed to CSV/PDF renderers.

Columns: Date, Check In, Check Out, Hours, Status, Work Mode. Rows arrive
already in display order; rendering itself lives outside this service.
"""

from __future__ import annotations

from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from hr_dashboard.attendance.schemas import ExportRowsResponse, ReconciledDay
from hr_dashboard.common.clock import format_time, hours_between
from hr_dashboard.common.constants import DATE_FORMAT, MISSING_VALUE


def day_hours(day: ReconciledDay) -> Optional[float]:
    """Backend-provided hours, else check-in to check-out, else None."""
    if day.work_hours is not None:
        return round(day.work_hours, 2)
    if day.check_in is not None and day.check_out is not None:
        return hours_between(day.check_in, day.check_out)
    return None


def export_row(day: ReconciledDay, tz: Optional[ZoneInfo] = None) -> list[str]:
    hours = day_hours(day)
    return [
        day.date.strftime(DATE_FORMAT),
        format_time(day.check_in, tz) or MISSING_VALUE,
        format_time(day.check_out, tz) or MISSING_VALUE,
        f"{hours:.2f}" if hours is not None else "0",
        day.status.value,
        day.work_mode.value if day.work_mode else MISSING_VALUE,
    ]


def export_rows(
    days: Iterable[ReconciledDay],
    tz: Optional[ZoneInfo] = None,
) -> ExportRowsResponse:
    """One row per reconciled day, preserving the caller's (display) order."""
    return ExportRowsResponse(rows=[export_row(d, tz) for d in days])
