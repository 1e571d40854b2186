"""Application configuration via environment variables."""

import json
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Record store (external REST backend)
    RECORD_STORE_URL: str = "http://localhost:8080/api"
    RECORD_STORE_TIMEOUT_SECONDS: float = 15.0
    RECORD_STORE_PAGE_SIZE: int = 500

    # Attendance / timesheet
    REPORTING_TIMEZONE: str = "Asia/Kolkata"
    TIMESHEET_WEEKS: int = 6

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: str = '["http://localhost:5173"]'

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS JSON string into a list."""
        try:
            return json.loads(self.CORS_ORIGINS)
        except (json.JSONDecodeError, TypeError):
            return ["http://localhost:5173"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
