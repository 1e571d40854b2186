"""Leave Pydantic v2 schemas — the apply request body and response envelopes."""


from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from hr_dashboard.record_store.schemas import LeaveRequest, StoreModel


class LeaveApplyRequest(StoreModel):
    """Payload for applying for leave.

    Carries no status: every application is forwarded as Pending, and a
    ``status`` sent by the client is ignored.
    """

    emp_id: str
    emp_name: Optional[str] = None
    from_date: date
    to_date: date
    leave_type: Optional[str] = Field(None, max_length=50)
    reason: Optional[str] = Field(None, max_length=500)

    @field_validator("emp_id", mode="before")
    @classmethod
    def _coerce_emp_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v


class LeaveListResponse(BaseModel):
    """An employee's leave requests as held by the store."""

    emp_id: str
    data: list[LeaveRequest]
    on_leave_today: bool = False
    degraded: bool = False


class LeaveApplyResponse(BaseModel):
    """Outcome of forwarding a leave application to the store."""

    accepted: bool = True
    leave: Optional[LeaveRequest] = None
