"""Common module — shared utilities for the HR dashboard."""

from hr_dashboard.common.constants import (
    DATE_FORMAT,
    EXPORT_COLUMNS,
    TIME_FORMAT,
    AttendanceStatus,
    GateState,
    LeaveStatus,
    WorkMode,
)
from hr_dashboard.common.exceptions import (
    AppException,
    GateViolation,
    InvalidInterval,
    StoreRejected,
    StoreUnavailable,
    ValidationException,
    register_exception_handlers,
)

__all__ = [
    # Constants / Enums
    "AttendanceStatus",
    "GateState",
    "LeaveStatus",
    "WorkMode",
    "DATE_FORMAT",
    "EXPORT_COLUMNS",
    "TIME_FORMAT",
    # Exceptions
    "AppException",
    "GateViolation",
    "InvalidInterval",
    "StoreRejected",
    "StoreUnavailable",
    "ValidationException",
    "register_exception_handlers",
]
