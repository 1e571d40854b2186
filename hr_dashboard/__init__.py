"""HR dashboard — attendance/leave reconciliation and weekly timesheet service."""

__version__ = "1.0.0"
