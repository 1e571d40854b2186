"""Per-employee attendance session — last-confirmed view and gate for long-lived callers.

The session only replaces its view after the store acknowledged a write and
a fresh reload completed. A failed write leaves the previous view (and gate)
exactly as it was.
"""

from __future__ import annotations

from typing import Optional

from hr_dashboard.attendance.gate import ensure_can_check_in, ensure_can_check_out
from hr_dashboard.attendance.schemas import AttendanceViewResponse, GateStatus
from hr_dashboard.attendance.service import AttendanceService
from hr_dashboard.common.constants import WorkMode
from hr_dashboard.record_store.client import RecordStoreClient


class AttendanceSession:
    """Holds one employee's reconciled view between actions."""

    def __init__(
        self,
        store: RecordStoreClient,
        emp_id: str,
        *,
        emp_name: Optional[str] = None,
    ) -> None:
        self.store = store
        self.emp_id = emp_id
        self.emp_name = emp_name
        self.view: Optional[AttendanceViewResponse] = None

    @property
    def gate(self) -> Optional[GateStatus]:
        return self.view.gate if self.view else None

    async def refresh(self) -> AttendanceViewResponse:
        self.view = await AttendanceService.load_view(self.store, self.emp_id)
        return self.view

    async def _current(self) -> AttendanceViewResponse:
        return self.view if self.view is not None else await self.refresh()

    async def check_in(self, work_mode: WorkMode = WorkMode.office) -> AttendanceViewResponse:
        # Local guard first: a known-disallowed action never touches the store
        ensure_can_check_in((await self._current()).gate)
        view = await AttendanceService.check_in(
            self.store, self.emp_id, work_mode=work_mode, emp_name=self.emp_name,
        )
        self.view = view
        return view

    async def check_out(self) -> AttendanceViewResponse:
        ensure_can_check_out((await self._current()).gate)
        view = await AttendanceService.check_out(self.store, self.emp_id)
        self.view = view
        return view
