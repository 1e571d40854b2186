"""Leave router — an employee's leave list and leave applications."""


from fastapi import APIRouter, Depends, Request

from hr_dashboard.common.rate_limit import WRITE_LIMIT, limiter
from hr_dashboard.dependencies import get_record_store
from hr_dashboard.leave.schemas import LeaveApplyRequest, LeaveApplyResponse, LeaveListResponse
from hr_dashboard.leave.service import LeaveService
from hr_dashboard.record_store.client import RecordStoreClient

router = APIRouter(prefix="", tags=["leave"])


# ── GET /employees/{emp_id} ─────────────────────────────────────────

@router.get(
    "/employees/{emp_id}",
    response_model=LeaveListResponse,
    response_model_by_alias=False,
)
async def employee_leaves(
    emp_id: str,
    store: RecordStoreClient = Depends(get_record_store),
):
    """All leave requests for an employee, whatever their status."""
    return await LeaveService.list_leaves(store, emp_id)


# ── POST /apply ─────────────────────────────────────────────────────

@router.post("/apply", response_model=LeaveApplyResponse, response_model_by_alias=False)
@limiter.limit(WRITE_LIMIT)
async def apply_leave(
    request: Request,
    body: LeaveApplyRequest,
    store: RecordStoreClient = Depends(get_record_store),
):
    """Forward a leave application. 422 when from_date is after to_date."""
    return await LeaveService.apply_leave(store, body)
