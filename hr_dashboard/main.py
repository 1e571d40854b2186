"""HR Dashboard — FastAPI application factory.

Wires the attendance, timesheet and leave routers over one shared record
store client, with problem+json errors and per-client throttling.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from hr_dashboard import __version__
from hr_dashboard.attendance.router import router as attendance_router
from hr_dashboard.common.exceptions import register_exception_handlers
from hr_dashboard.common.rate_limit import limiter
from hr_dashboard.config import settings
from hr_dashboard.leave.router import router as leave_router
from hr_dashboard.record_store.client import RecordStoreClient
from hr_dashboard.timesheet.router import router as timesheet_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

ROUTERS = (
    (attendance_router, "/attendance", "attendance"),
    (timesheet_router, "/timesheet", "timesheet"),
    (leave_router, "/leave", "leave"),
)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the record store client for the app's lifetime."""
    # A store already on app.state (tests) is left to its owner
    owns_store = getattr(app.state, "record_store", None) is None
    if owns_store:
        app.state.record_store = RecordStoreClient.from_settings()
        logger.info(
            "Record store at %s, reporting timezone %s",
            settings.RECORD_STORE_URL, settings.REPORTING_TIMEZONE,
        )
    yield
    # Shutdown
    if owns_store:
        await app.state.record_store.aclose()


def create_app() -> FastAPI:
    """Build the dashboard API."""
    configure_logging()
    show_docs = settings.ENVIRONMENT != "production"

    app = FastAPI(
        title="HR Dashboard",
        description="Attendance / leave reconciliation and weekly timesheets",
        version=__version__,
        docs_url="/api/docs" if show_docs else None,
        redoc_url="/api/redoc" if show_docs else None,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # slowapi reads the limiter from app.state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH"],
        allow_headers=["*"],
    )

    @app.get(f"{API_PREFIX}/health", tags=["system"])
    async def health_check():
        return {
            "status": "healthy",
            "version": __version__,
            "environment": settings.ENVIRONMENT,
            "reporting_timezone": settings.REPORTING_TIMEZONE,
        }

    for router, prefix, tag in ROUTERS:
        app.include_router(router, prefix=f"{API_PREFIX}{prefix}", tags=[tag])

    return app


app = create_app()
