"""Weekly timesheet bucketer — re-buckets reconciled rows into 7 Monday→Sunday cells.

Rows are matched by reporting-timezone calendar day, never by raw instant.
Days without a row become Weekoff on Saturday/Sunday and Absent otherwise,
so an unexplained weekday gap stays visible. The output depends only on the
week and the rows passed in.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from hr_dashboard.attendance.export import day_hours
from hr_dashboard.attendance.reconciler import record_day
from hr_dashboard.attendance.schemas import ReconciledDay
from hr_dashboard.common.clock import WeekRange, week_of
from hr_dashboard.common.constants import DAYS_PER_WEEK, WEEKEND_DAYS, AttendanceStatus
from hr_dashboard.timesheet.schemas import TimesheetCell


def default_status(day: date) -> AttendanceStatus:
    """Status for a day with no attendance row."""
    if day.weekday() in WEEKEND_DAYS:
        return AttendanceStatus.weekoff
    return AttendanceStatus.absent


def _index_by_day(
    days: Iterable[ReconciledDay],
    week: WeekRange,
) -> dict[date, ReconciledDay]:
    """First row per calendar day inside *week*; rows outside it are dropped."""
    index: dict[date, ReconciledDay] = {}
    for row in days:
        key = record_day(row)
        if key is None or not week.contains(key):
            continue
        index.setdefault(key, row)
    return index


def _cell(day: date, row: Optional[ReconciledDay]) -> TimesheetCell:
    weekday = day.strftime("%A")
    if row is None:
        return TimesheetCell(date=day, weekday=weekday, status=default_status(day))

    return TimesheetCell(
        date=day,
        weekday=weekday,
        status=row.status,
        check_in=row.check_in,
        check_out=row.check_out,
        work_mode=row.work_mode,
        hours=day_hours(row) or 0.0,
    )


def bucket_week(week: WeekRange, days: Iterable[ReconciledDay]) -> list[TimesheetCell]:
    """Exactly seven cells, Monday first, covering ``week.start .. week.start + 6``."""

    week = week_of(week.start)
    index = _index_by_day(days, week)
    cells = []
    for offset in range(DAYS_PER_WEEK):
        day = week.start + timedelta(days=offset)
        cells.append(_cell(day, index.get(day)))
    return cells


def week_total_hours(cells: Sequence[TimesheetCell]) -> float:
    return round(sum(c.hours for c in cells), 2)
