"""Shared test fixtures — in-memory record store, frozen clock, app and client.

Reusable across all test modules (clock, leave, attendance, timesheet, ...).
The fake store speaks the same interface as RecordStoreClient and records
every call so tests can assert that rejected actions never reach it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Optional
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from hr_dashboard.common.exceptions import StoreUnavailable
from hr_dashboard.main import create_app
from hr_dashboard.record_store.schemas import (
    AttendanceRecord,
    CheckInPayload,
    CheckOutPayload,
    LeaveApplyPayload,
    LeaveRequest,
)

# Tuesday 2024-06-11, 09:00 in Asia/Kolkata
FROZEN_NOW = datetime(2024, 6, 11, 3, 30, tzinfo=timezone.utc)

WRITE_OPERATIONS = {"create_check_in", "patch_check_out", "apply_leave"}


# ── Fake record store ───────────────────────────────────────────────

class FakeRecordStore:
    """In-memory stand-in for the REST backend, keyed by camelCase rows."""

    def __init__(self) -> None:
        self.attendance: list[dict[str, Any]] = []
        self.leaves: list[dict[str, Any]] = []
        self.calls: list[str] = []
        self.failing: set[str] = set()
        self._next_id = 1

    @property
    def writes(self) -> list[str]:
        return [c for c in self.calls if c in WRITE_OPERATIONS]

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failing:
            raise StoreUnavailable(operation, "Simulated outage.")

    def add_attendance(self, **row: Any) -> dict[str, Any]:
        row.setdefault("id", self._next_id)
        self._next_id += 1
        self.attendance.append(row)
        return row

    def add_leave(self, **row: Any) -> dict[str, Any]:
        self.leaves.append(row)
        return row

    async def list_attendance(self, emp_id: Optional[str] = None) -> list[AttendanceRecord]:
        self._enter("list_attendance")
        return [
            AttendanceRecord.model_validate(r)
            for r in self.attendance
            if emp_id is None or str(r["empId"]) == emp_id
        ]

    async def list_leaves(self, emp_id: str) -> list[LeaveRequest]:
        self._enter("list_leaves")
        return [
            LeaveRequest.model_validate(r)
            for r in self.leaves
            if str(r["empId"]) == emp_id
        ]

    async def create_check_in(self, payload: CheckInPayload) -> AttendanceRecord:
        self._enter("create_check_in")
        row = self.add_attendance(**payload.to_store())
        return AttendanceRecord.model_validate(row)

    async def patch_check_out(self, record_id, payload: CheckOutPayload) -> AttendanceRecord:
        self._enter("patch_check_out")
        row = next(r for r in self.attendance if r["id"] == record_id)
        row.update(payload.to_store())
        return AttendanceRecord.model_validate(row)

    async def apply_leave(self, payload: LeaveApplyPayload) -> LeaveRequest:
        self._enter("apply_leave")
        row = self.add_leave(**payload.to_store())
        return LeaveRequest.model_validate(row)

    async def aclose(self) -> None:
        pass


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


# ── Clock ───────────────────────────────────────────────────────────

@pytest.fixture
def frozen_now():
    """Pin the wall clock to FROZEN_NOW (today = 2024-06-11 in IST)."""
    with patch("hr_dashboard.common.clock.now", return_value=FROZEN_NOW):
        yield FROZEN_NOW


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from hr_dashboard.common.rate_limit import limiter

    limiter.reset()
    yield


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app(store):
    """Create a fresh app instance wired to the fake store."""
    application = create_app()
    application.state.record_store = store
    yield application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
