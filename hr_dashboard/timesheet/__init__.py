"""Timesheet module — Monday–Sunday weekly bucketing."""
