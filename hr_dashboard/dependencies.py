"""Shared FastAPI dependencies."""

from fastapi import Request

from hr_dashboard.record_store.client import RecordStoreClient


async def get_record_store(request: Request) -> RecordStoreClient:
    """FastAPI dependency: the record store client opened in the app lifespan."""
    return request.app.state.record_store
