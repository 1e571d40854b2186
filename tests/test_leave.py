"""Tests for the leave overlay and the leave endpoints.

Covers inclusive interval coverage, approved-only filtering, malformed
intervals, and the list/apply API over the in-memory record store.
"""

from __future__ import annotations

import logging
from datetime import date

import pytest

from hr_dashboard.common.constants import LeaveStatus
from hr_dashboard.common.exceptions import InvalidInterval
from hr_dashboard.leave.overlay import approved_leaves, covers, is_on_leave, validate_interval
from hr_dashboard.record_store.schemas import LeaveRequest


def _leave(start: date, end: date, status: LeaveStatus = LeaveStatus.approved, **kw) -> LeaveRequest:
    return LeaveRequest(emp_id="E1", from_date=start, to_date=end, status=status, **kw)


# ═════════════════════════════════════════════════════════════════════
# OVERLAY
# ═════════════════════════════════════════════════════════════════════


class TestOverlay:
    """Tests for is_on_leave / covers."""

    def test_boundaries_are_inclusive(self):
        leave = _leave(date(2024, 6, 10), date(2024, 6, 12))

        assert covers(leave, date(2024, 6, 10))
        assert covers(leave, date(2024, 6, 11))
        assert covers(leave, date(2024, 6, 12))
        assert not covers(leave, date(2024, 6, 9))
        assert not covers(leave, date(2024, 6, 13))

    def test_single_day_leave(self):
        leaves = [_leave(date(2024, 6, 14), date(2024, 6, 14))]
        assert is_on_leave(date(2024, 6, 14), leaves)
        assert not is_on_leave(date(2024, 6, 13), leaves)

    @pytest.mark.parametrize(
        "status",
        [LeaveStatus.pending, LeaveStatus.rejected, LeaveStatus.cancelled],
    )
    def test_non_approved_leave_is_ignored(self, status):
        leaves = [_leave(date(2024, 6, 10), date(2024, 6, 12), status)]
        assert not is_on_leave(date(2024, 6, 11), leaves)

    def test_no_leaves(self):
        assert not is_on_leave(date(2024, 6, 11), [])

    def test_any_matching_leave_counts(self):
        leaves = [
            _leave(date(2024, 6, 1), date(2024, 6, 2)),
            _leave(date(2024, 6, 10), date(2024, 6, 12), LeaveStatus.pending),
            _leave(date(2024, 6, 11), date(2024, 6, 11)),
        ]
        assert is_on_leave(date(2024, 6, 11), leaves)
        assert not is_on_leave(date(2024, 6, 10), leaves)

    def test_store_status_casing_is_normalised(self):
        leave = LeaveRequest.model_validate(
            {"empId": 7, "fromDate": "2024-06-10", "toDate": "2024-06-10", "status": "APPROVED"}
        )
        assert leave.emp_id == "7"
        assert is_on_leave(date(2024, 6, 10), [leave])


class TestInvalidInterval:
    def test_validate_interval_raises(self):
        with pytest.raises(InvalidInterval) as info:
            validate_interval(_leave(date(2024, 6, 12), date(2024, 6, 10)))
        assert info.value.from_date == date(2024, 6, 12)

    def test_inverted_leave_is_skipped_with_warning(self, caplog):
        bad = _leave(date(2024, 6, 12), date(2024, 6, 10), id=99)
        good = _leave(date(2024, 6, 20), date(2024, 6, 21))

        with caplog.at_level(logging.WARNING, logger="hr_dashboard.leave.overlay"):
            result = approved_leaves([bad, good])

        assert result == [good]
        assert "Ignoring leave 99" in caplog.text
        assert not is_on_leave(date(2024, 6, 11), [bad, good])
        assert is_on_leave(date(2024, 6, 20), [bad, good])


# ═════════════════════════════════════════════════════════════════════
# API
# ═════════════════════════════════════════════════════════════════════


class TestLeaveAPI:
    async def test_list_leaves(self, client, store, frozen_now):
        store.add_leave(
            id=1, empId="E1", fromDate="2024-06-10", toDate="2024-06-12",
            status="Approved", leaveType="Casual",
        )
        store.add_leave(id=2, empId="E2", fromDate="2024-06-10", toDate="2024-06-12", status="Approved")

        resp = await client.get("/api/v1/leave/employees/E1")

        assert resp.status_code == 200
        body = resp.json()
        assert body["emp_id"] == "E1"
        assert body["on_leave_today"] is True
        assert body["degraded"] is False
        assert len(body["data"]) == 1
        assert body["data"][0]["from_date"] == "2024-06-10"
        assert body["data"][0]["leave_type"] == "Casual"

    async def test_list_leaves_degrades_when_store_is_down(self, client, store, frozen_now):
        store.failing.add("list_leaves")

        resp = await client.get("/api/v1/leave/employees/E1")

        assert resp.status_code == 200
        body = resp.json()
        assert body["degraded"] is True
        assert body["data"] == []
        assert body["on_leave_today"] is False

    async def test_apply_forwards_valid_application(self, client, store):
        resp = await client.post(
            "/api/v1/leave/apply",
            json={
                "empId": "E1",
                "fromDate": "2024-06-20",
                "toDate": "2024-06-21",
                "leaveType": "Sick",
                "reason": "Fever",
            },
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["accepted"] is True
        assert body["leave"]["status"] == "Pending"
        assert store.writes == ["apply_leave"]
        assert store.leaves[0]["fromDate"] == "2024-06-20"

    async def test_apply_always_forwards_pending(self, client, store, frozen_now):
        resp = await client.post(
            "/api/v1/leave/apply",
            json={
                "empId": "E1",
                "fromDate": "2024-06-11",
                "toDate": "2024-06-11",
                "status": "Approved",
            },
        )

        assert resp.status_code == 200
        assert store.leaves[0]["status"] == "Pending"
        assert resp.json()["leave"]["status"] == "Pending"

        # A self-approved application must not put today on leave
        listing = await client.get("/api/v1/leave/employees/E1")
        assert listing.json()["on_leave_today"] is False
        gate = await client.get("/api/v1/attendance/employees/E1/gate")
        assert gate.json()["state"] == "NoRecord"

    async def test_apply_rejects_inverted_interval(self, client, store):
        resp = await client.post(
            "/api/v1/leave/apply",
            json={"empId": "E1", "fromDate": "2024-06-12", "toDate": "2024-06-10"},
        )

        assert resp.status_code == 422
        assert resp.headers["content-type"].startswith("application/problem+json")
        assert resp.json()["type"].endswith("/invalid-interval")
        assert store.writes == []

    async def test_apply_surfaces_store_outage(self, client, store):
        store.failing.add("apply_leave")

        resp = await client.post(
            "/api/v1/leave/apply",
            json={"empId": "E1", "fromDate": "2024-06-20", "toDate": "2024-06-20"},
        )

        assert resp.status_code == 503
        assert resp.json()["type"].endswith("/store-unavailable")
