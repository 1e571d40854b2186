"""Leave overlay — the single authority on whether a calendar day is covered by leave.

Used by the reconciler (which rows display as Leave) and by the gate
(is the employee on leave today), so both views always agree.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from hr_dashboard.common.constants import LeaveStatus
from hr_dashboard.common.exceptions import InvalidInterval
from hr_dashboard.record_store.schemas import LeaveRequest

logger = logging.getLogger(__name__)


def validate_interval(leave: LeaveRequest) -> None:
    """Raise InvalidInterval when the leave starts after it ends."""
    if leave.from_date > leave.to_date:
        raise InvalidInterval(leave.from_date, leave.to_date)


def approved_leaves(leaves: Iterable[LeaveRequest]) -> list[LeaveRequest]:
    """Approved leaves with well-formed intervals, in input order.

    Malformed intervals are logged and dropped so one bad row cannot
    hide the leave status carried by the others.
    """

    result: list[LeaveRequest] = []
    for leave in leaves:
        if leave.status != LeaveStatus.approved:
            continue
        try:
            validate_interval(leave)
        except InvalidInterval as exc:
            logger.warning(
                "Ignoring leave %s for employee %s: %s",
                leave.id, leave.emp_id, exc.detail,
            )
            continue
        result.append(leave)
    return result


def covers(leave: LeaveRequest, day: date) -> bool:
    """Inclusive on both ends: boundary days are on leave."""
    return leave.from_date <= day <= leave.to_date


def is_on_leave(day: date, leaves: Iterable[LeaveRequest]) -> bool:
    """True iff an approved, well-formed leave covers *day*."""
    return any(covers(leave, day) for leave in approved_leaves(leaves))
