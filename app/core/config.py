"""Application settings.

Centralizes configuration (export sizing, seeding, naming) so the rest of the
app can depend on a single settings object rather than scattered env reads.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables and .env."""

    app_title: str = "Logistics Operations Excel Dashboard"

    # Export sizing
    row_count: int = Field(default=400, ge=1)
    month_window: int = Field(default=6, ge=1)

    # Workbook metadata
    export_filename: str = "Logistics_Dashboard.xlsx"
    workbook_creator: str = "Agentic Dashboard"

    # Fixed seed for reproducible exports; None draws from OS entropy per request.
    random_seed: int | None = None

    log_level: str = "INFO"

    # Load variables from a local .env file when present.
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


# Singleton settings instance used throughout the application.
settings = Settings()
