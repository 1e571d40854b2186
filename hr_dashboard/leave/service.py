"""Leave service — reads and validated applications against the record store."""

from __future__ import annotations

import logging

from hr_dashboard.common import clock
from hr_dashboard.common.constants import LeaveStatus
from hr_dashboard.leave.overlay import is_on_leave, validate_interval
from hr_dashboard.leave.schemas import LeaveApplyRequest, LeaveApplyResponse, LeaveListResponse
from hr_dashboard.record_store.client import RecordStoreClient, degrade_read
from hr_dashboard.record_store.schemas import LeaveApplyPayload, LeaveRequest

logger = logging.getLogger(__name__)


class LeaveService:
    """Async leave operations: list, apply."""

    @staticmethod
    async def list_leaves(store: RecordStoreClient, emp_id: str) -> LeaveListResponse:
        leaves, degraded = await degrade_read(store.list_leaves(emp_id), "list_leaves")
        return LeaveListResponse(
            emp_id=emp_id,
            data=leaves,
            on_leave_today=is_on_leave(clock.today(), leaves),
            degraded=degraded,
        )

    @staticmethod
    async def apply_leave(
        store: RecordStoreClient,
        body: LeaveApplyRequest,
    ) -> LeaveApplyResponse:
        """Reject inverted intervals locally, then forward to the store as Pending."""

        validate_interval(
            LeaveRequest(emp_id=body.emp_id, from_date=body.from_date, to_date=body.to_date)
        )
        # Approval happens elsewhere; an application always starts Pending
        payload = LeaveApplyPayload(
            **body.model_dump(),
            status=LeaveStatus.pending,
        )
        leave = await store.apply_leave(payload)
        logger.info(
            "Leave applied for employee %s: %s to %s",
            payload.emp_id, payload.from_date, payload.to_date,
        )
        return LeaveApplyResponse(leave=leave)
