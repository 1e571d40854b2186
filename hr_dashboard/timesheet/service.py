"""Timesheet service — week selection and 7-cell week views."""

from __future__ import annotations

from datetime import date
from typing import Optional

from hr_dashboard.attendance.service import AttendanceService
from hr_dashboard.common import clock
from hr_dashboard.common.constants import MAX_TIMESHEET_WEEKS
from hr_dashboard.common.exceptions import ValidationException
from hr_dashboard.record_store.client import RecordStoreClient
from hr_dashboard.timesheet.bucketer import bucket_week, week_total_hours
from hr_dashboard.timesheet.schemas import TimesheetResponse, WeekListResponse


class TimesheetService:
    """Weekly timesheet reads."""

    @staticmethod
    def list_weeks(count: int, *, today: Optional[date] = None) -> WeekListResponse:
        if count > MAX_TIMESHEET_WEEKS:
            raise ValidationException(
                {"count": [f"Cannot list more than {MAX_TIMESHEET_WEEKS} weeks."]}
            )
        return WeekListResponse(weeks=clock.weeks_back(count, today))

    @staticmethod
    def resolve_week(
        *,
        week_index: Optional[int] = None,
        start: Optional[date] = None,
        today: Optional[date] = None,
    ) -> clock.WeekRange:
        """Pick a week by explicit date, or by index back from the current week."""

        if start is not None and week_index is not None:
            raise ValidationException(
                {"week": ["Pass either a week index or a start date, not both."]}
            )
        if start is not None:
            return clock.week_of(start)

        index = week_index or 0
        if not 0 <= index < MAX_TIMESHEET_WEEKS:
            raise ValidationException(
                {"week": [f"Week index must be between 0 and {MAX_TIMESHEET_WEEKS - 1}."]}
            )
        return clock.weeks_back(index + 1, today)[index]

    @staticmethod
    async def get_week(
        store: RecordStoreClient,
        emp_id: str,
        week: clock.WeekRange,
    ) -> TimesheetResponse:
        """Seven reconciled cells for *week* (Monday first) plus total hours."""

        view = await AttendanceService.load_view(store, emp_id)
        cells = bucket_week(week, view.records)
        return TimesheetResponse(
            emp_id=emp_id,
            week=clock.week_of(week.start),
            cells=cells,
            total_hours=week_total_hours(cells),
            degraded=view.degraded,
        )
