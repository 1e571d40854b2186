"""Attendance module — reconciliation, check-in/check-out gate, daily views."""
