# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application settings loaded from the environment."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    Every field can be overridden with a ``SALESCRM_`` prefixed environment
    variable, e.g. ``SALESCRM_DATABASE_URL=postgresql://...``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SALESCRM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./salescrm.db",
        description="SQLAlchemy database URL",
    )
    session_cookie_name: str = Field(default="session")
    session_expiry_days: int = Field(default=7, ge=1)
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    cors_origins: list[str] = Field(default=["http://localhost:5173"])


settings = Settings()
