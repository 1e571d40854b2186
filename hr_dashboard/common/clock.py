"""Reporting-timezone clock: calendar-day bucketing and Monday–Sunday week ranges.

Every instant that has to land on a calendar day (check-in times, "today",
record dates sent as timestamps) goes through ``day_key`` so the attendance
table, the gate and the weekly timesheet all agree on day boundaries.
Instants are stored in UTC; conversion happens only here.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional, Union
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict

from hr_dashboard.common.constants import DATE_FORMAT, DAYS_PER_WEEK, TIME_FORMAT
from hr_dashboard.common.exceptions import ValidationException
from hr_dashboard.config import settings

DayLike = Union[date, datetime, str]


class WeekRange(BaseModel):
    """Inclusive Monday–Sunday range with a display label."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date
    label: str

    def days(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@lru_cache(maxsize=8)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def reporting_tz(name: Optional[str] = None) -> ZoneInfo:
    """Resolve the reporting timezone (defaults to ``settings.REPORTING_TIMEZONE``)."""
    return _zone(name or settings.REPORTING_TIMEZONE)


def as_utc(instant: datetime) -> datetime:
    """Attach UTC to naive instants (the store's convention) and normalise aware ones."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant, accepting a trailing ``Z``."""
    return as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))


def day_key(value: DayLike, tz: Optional[ZoneInfo] = None) -> date:
    """Map an instant (or calendar day) to its calendar day in the reporting timezone.

    - ``date``: already a calendar day, returned unchanged.
    - ``datetime``: naive values are UTC; converted to ``tz`` then truncated.
    - ``str``: ``YYYY-MM-DD`` is a calendar day; anything longer is an instant.
    """
    zone = tz or reporting_tz()

    if isinstance(value, datetime):
        return as_utc(value).astimezone(zone).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return parse_instant(text).astimezone(zone).date()
    raise TypeError(f"Cannot derive a calendar day from {type(value).__name__}")


def now() -> datetime:
    """Current instant (UTC, aware)."""
    return datetime.now(timezone.utc)


def today(tz: Optional[ZoneInfo] = None) -> date:
    """Current calendar day in the reporting timezone."""
    return day_key(now(), tz)


def monday_of(day: date) -> date:
    """Monday of the Monday–Sunday week containing *day* (Sunday maps back six days)."""
    return day - timedelta(days=day.weekday())


def week_of(day: date) -> WeekRange:
    """The WeekRange containing *day*."""
    start = monday_of(day)
    end = start + timedelta(days=DAYS_PER_WEEK - 1)
    return WeekRange(
        start=start,
        end=end,
        label=f"{start.strftime(DATE_FORMAT)} – {end.strftime(DATE_FORMAT)}",
    )


def weeks_back(n: int, reference: Optional[date] = None) -> list[WeekRange]:
    """*n* consecutive week ranges ending with the current week, most recent first."""
    if n < 1:
        raise ValidationException({"count": ["Week count must be at least 1."]})

    current = monday_of(reference or today())
    return [week_of(current - timedelta(weeks=i)) for i in range(n)]


def format_time(instant: Optional[datetime], tz: Optional[ZoneInfo] = None) -> Optional[str]:
    """Render an instant as wall-clock time in the reporting timezone."""
    if instant is None:
        return None
    return as_utc(instant).astimezone(tz or reporting_tz()).strftime(TIME_FORMAT)


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed fractional hours, rounded to 2 dp; never negative."""
    seconds = (as_utc(end) - as_utc(start)).total_seconds()
    return round(max(0.0, seconds / 3600), 2)
