"""
Application settings for the Sheets gateway.

Settings are read once at startup from environment variables prefixed
with ``SHEETS_API_`` (and an optional ``.env`` file) and passed
explicitly to the backend and service. Nothing mutates them at runtime.

Example:
    SHEETS_API_WORKBOOK_ID=/data/crm.xlsx uvicorn sheets_api.main:app
"""

import logging
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-wide configuration.

    Attributes:
        workbook_id: Identifier of the backing workbook. A file path for the
            openpyxl backend, a spreadsheet key for the gspread backend.
        backend: Which tabular backend to use.
        google_credentials_file: Service-account JSON for the gspread backend.
        host: Bind address for the HTTP server.
        port: Port for the HTTP server.
        log_level: Root logging level name.
        allowed_origins: Comma-separated CORS origins; empty means any.
    """

    workbook_id: str = Field(default="workbook.xlsx", description="Backing workbook identifier")
    backend: Literal["openpyxl", "gspread", "memory"] = Field(
        default="openpyxl",
        description="Tabular backend implementation",
    )
    google_credentials_file: str = Field(
        default="",
        description="Path to a Google service-account JSON file (gspread backend)",
    )
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    allowed_origins: str = ""

    model_config = SettingsConfigDict(
        env_prefix="SHEETS_API_",
        env_file=".env",
        extra="ignore",
    )

    def get_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        if not self.allowed_origins:
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Return the settings loaded at first use."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the server entry points.

    Args:
        level: Logging level name, e.g. "DEBUG" or "INFO".
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
