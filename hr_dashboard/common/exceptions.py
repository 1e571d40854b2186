"""Attendance error taxonomy and its RFC 7807 problem+json rendering.

Gate violations are raised before any record store call; store failures carry
the failed operation name so logs and responses point at the same call.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

BASE_ERROR_URI = "https://hr-dashboard.local/errors"


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all application exceptions → RFC 7807 JSON."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        super().__init__(detail)


class GateViolation(AppException):
    """409 — check-in/check-out attempted from a state that does not permit it."""

    def __init__(self, action: str, state: str) -> None:
        self.action = action
        self.state = state
        super().__init__(
            status_code=409,
            error_type="gate-violation",
            title="Action Not Permitted",
            detail=f"Cannot {action} while attendance state is '{state}'.",
            errors={action: [f"Not permitted in state '{state}'."]},
        )


class StoreUnavailable(AppException):
    """503 — the record store could not be reached or failed server-side."""

    def __init__(self, operation: str, reason: str = "") -> None:
        self.operation = operation
        detail = f"Record store unavailable during '{operation}'."
        if reason:
            detail = f"{detail} {reason}"
        super().__init__(
            status_code=503,
            error_type="store-unavailable",
            title="Record Store Unavailable",
            detail=detail,
        )


class StoreRejected(AppException):
    """4xx — the record store refused a write (conflict, bad payload, ...)."""

    def __init__(self, operation: str, status_code: int, message: str) -> None:
        self.operation = operation
        super().__init__(
            status_code=status_code,
            error_type="store-rejected",
            title="Record Store Rejected Request",
            detail=message or f"Record store rejected '{operation}'.",
        )


class InvalidInterval(AppException):
    """422 — a leave interval whose start falls after its end."""

    def __init__(self, from_date: date, to_date: date) -> None:
        self.from_date = from_date
        self.to_date = to_date
        super().__init__(
            status_code=422,
            error_type="invalid-interval",
            title="Invalid Leave Interval",
            detail=f"Leave from {from_date.isoformat()} is after {to_date.isoformat()}.",
            errors={"date_range": ["from_date must be before or equal to to_date."]},
        )


class ValidationException(AppException):
    """422 — business-logic validation failures."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(
            status_code=422,
            error_type="validation-error",
            title="Validation Error",
            detail="One or more fields failed validation.",
            errors=errors,
        )


# ── Problem-detail rendering ────────────────────────────────────────

PROBLEM_MEDIA_TYPE = "application/problem+json"


def _problem_response(
    request: Request,
    *,
    status_code: int,
    error_type: str,
    title: str,
    detail: str,
    errors: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "type": f"{BASE_ERROR_URI}/{error_type}",
        "title": title,
        "status": status_code,
        "detail": detail,
        "instance": request.url.path,
    }
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body, media_type=PROBLEM_MEDIA_TYPE)


def _field_name(loc: tuple) -> str:
    # ("query", "week") → "week"; ("body", "work_mode") → "work_mode"
    if len(loc) > 1:
        return ".".join(str(part) for part in loc[1:])
    return str(loc[0]) if loc else "unknown"


async def _handle_app_exception(request: Request, exc: AppException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return _problem_response(
        request,
        status_code=exc.status_code,
        error_type=exc.error_type,
        title=exc.title,
        detail=exc.detail,
        errors=exc.errors,
    )


async def _handle_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    field_errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field_errors.setdefault(_field_name(tuple(err.get("loc", ()))), []).append(
            err.get("msg", "Invalid value")
        )
    return _problem_response(
        request,
        status_code=422,
        error_type="validation-error",
        title="Validation Error",
        detail="Request validation failed.",
        errors=field_errors,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every AppException and request-validation failure as problem+json."""
    app.add_exception_handler(AppException, _handle_app_exception)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_validation_error)  # type: ignore[arg-type]
