"""Record store client — async REST access to attendance and leave entities.

The store is the source of truth; this client only reads and forwards
writes. Failures are mapped onto the application exception hierarchy:

  - transport errors, timeouts, 5xx, undecodable bodies → StoreUnavailable
  - 4xx → StoreRejected (carrying the backend's ``message`` when present)
  - 404 on a list read → empty list
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Optional, TypeVar, Union

import httpx
from pydantic import ValidationError

from hr_dashboard.common.exceptions import StoreRejected, StoreUnavailable
from hr_dashboard.config import settings
from hr_dashboard.record_store.schemas import (
    AttendanceRecord,
    CheckInPayload,
    CheckOutPayload,
    LeaveApplyPayload,
    LeaveRequest,
    StoreModel,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=StoreModel)
T = TypeVar("T")

# ── Endpoints ───────────────────────────────────────────────────────

ATTENDANCE_ALL_PATH = "/attendance"
ATTENDANCE_BY_EMPLOYEE_PATH = "/attendance/employee/{emp_id}"
CHECK_IN_PATH = "/attendance/checkin"
CHECK_OUT_PATH = "/attendance/checkout/{record_id}"
LEAVES_BY_EMPLOYEE_PATH = "/leave-approvel/employee/{emp_id}"
LEAVE_APPLY_PATH = "/leave-approvel/apply"


class StoreRows(list):
    """Rows from one list read, with a count of the malformed ones left out."""

    def __init__(self, rows=(), skipped: int = 0) -> None:
        super().__init__(rows)
        self.skipped = skipped


def _parse_rows(
    model: type[ModelT],
    rows: Any,
    operation: str,
) -> StoreRows:
    """Validate each row independently; malformed rows are skipped, not fatal."""

    if isinstance(rows, dict):
        # Spring-style page envelope
        rows = rows.get("content", [])
    if not isinstance(rows, list):
        raise StoreUnavailable(operation, "Unexpected response shape.")

    parsed = StoreRows()
    for index, row in enumerate(rows):
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed %s row %d from %s: %s",
                model.__name__, index, operation, exc.errors()[:1],
            )
            parsed.skipped += 1
    return parsed


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or body.get("error") or "")
    return ""


async def degrade_read(read: Awaitable[list[T]], operation: str) -> tuple[list[T], bool]:
    """Await a store read, reporting whether its result is incomplete.

    StoreUnavailable becomes ``([], True)``. A read that had to skip malformed
    rows keeps the rest but is also reported degraded: the skipped row may be
    the one the gate needed.
    """
    try:
        rows = await read
    except StoreUnavailable as exc:
        logger.warning("Degrading %s to an empty result: %s", operation, exc.detail)
        return [], True
    skipped = getattr(rows, "skipped", 0)
    if skipped:
        logger.warning("%s skipped %d malformed row(s); marking degraded", operation, skipped)
    return rows, bool(skipped)


class RecordStoreClient:
    """Async client for the attendance/leave REST backend."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        page_size: int = 500,
    ) -> None:
        self._http = http
        self._page_size = page_size

    @classmethod
    def from_settings(cls) -> "RecordStoreClient":
        http = httpx.AsyncClient(
            base_url=settings.RECORD_STORE_URL,
            timeout=settings.RECORD_STORE_TIMEOUT_SECONDS,
            headers={"Accept": "application/json"},
        )
        return cls(http, page_size=settings.RECORD_STORE_PAGE_SIZE)

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Transport ───────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        empty_on_404: bool = False,
    ) -> Any:
        logger.debug("Record store request: %s %s", method, path)
        try:
            response = await self._http.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            logger.warning("Record store %s failed: %s", operation, exc)
            raise StoreUnavailable(operation, str(exc)) from exc

        if response.status_code == 404 and empty_on_404:
            return []
        if response.status_code >= 500:
            logger.warning(
                "Record store %s returned %d", operation, response.status_code,
            )
            raise StoreUnavailable(operation, f"HTTP {response.status_code}.")
        if response.status_code >= 400:
            raise StoreRejected(operation, response.status_code, _error_message(response))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise StoreUnavailable(operation, "Response body is not JSON.") from exc

    # ── Reads ───────────────────────────────────────────────────────

    async def list_attendance(self, emp_id: Optional[str] = None) -> list[AttendanceRecord]:
        """Attendance rows for one employee, or for everyone when *emp_id* is None."""

        if emp_id is None:
            body = await self._request(
                "GET",
                ATTENDANCE_ALL_PATH,
                operation="list_attendance",
                params={"page": 0, "size": self._page_size},
                empty_on_404=True,
            )
        else:
            body = await self._request(
                "GET",
                ATTENDANCE_BY_EMPLOYEE_PATH.format(emp_id=emp_id),
                operation="list_attendance",
                empty_on_404=True,
            )
        return _parse_rows(AttendanceRecord, body or [], "list_attendance")

    async def list_leaves(self, emp_id: str) -> list[LeaveRequest]:
        body = await self._request(
            "GET",
            LEAVES_BY_EMPLOYEE_PATH.format(emp_id=emp_id),
            operation="list_leaves",
            empty_on_404=True,
        )
        return _parse_rows(LeaveRequest, body or [], "list_leaves")

    # ── Writes ──────────────────────────────────────────────────────

    async def create_check_in(self, payload: CheckInPayload) -> Optional[AttendanceRecord]:
        body = await self._request(
            "POST", CHECK_IN_PATH, operation="create_check_in", json=payload.to_store(),
        )
        return self._parse_written(AttendanceRecord, body, "create_check_in")

    async def patch_check_out(
        self,
        record_id: Union[int, str],
        payload: CheckOutPayload,
    ) -> Optional[AttendanceRecord]:
        body = await self._request(
            "PATCH",
            CHECK_OUT_PATH.format(record_id=record_id),
            operation="patch_check_out",
            json=payload.to_store(),
        )
        return self._parse_written(AttendanceRecord, body, "patch_check_out")

    async def apply_leave(self, payload: LeaveApplyPayload) -> Optional[LeaveRequest]:
        body = await self._request(
            "POST", LEAVE_APPLY_PATH, operation="apply_leave", json=payload.to_store(),
        )
        return self._parse_written(LeaveRequest, body, "apply_leave")

    @staticmethod
    def _parse_written(model: type[ModelT], body: Any, operation: str) -> Optional[ModelT]:
        """The 2xx status is the acknowledgement; the echoed entity is informational."""
        if not body:
            return None
        try:
            return model.model_validate(body)
        except ValidationError:
            logger.warning("Record store %s echoed an unreadable entity", operation)
            return None
