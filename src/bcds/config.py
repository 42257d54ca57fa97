"""
Configuration management for the BCDS membership tracker.

Uses Pydantic Settings to load configuration from environment variables
with sensible defaults for development. Sensitive values (database URL,
PDGA API credentials) should be set via environment variables or .env file.

Usage:
    from bcds.config import settings
    print(settings.database_url)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can be set directly or via a .env file
    in the project root directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ==========================================================================
    # Database Configuration
    # ==========================================================================

    database_url: str = Field(
        default="sqlite:///bcds.db",
        description="SQLAlchemy connection URL for the player registry",
    )
    db_echo: bool = Field(
        default=False,
        description="Log every SQL statement (very noisy)",
    )

    # ==========================================================================
    # Membership Sheet Configuration
    # ==========================================================================

    sheet_reload_latency_seconds: int = Field(
        default=300,
        description="Minimum seconds between two imports of the membership sheet",
    )
    membership_rollover_month: int = Field(
        default=10,
        description=(
            "Payments made in this month or later cover the rest of the year "
            "plus the whole of the following year"
        ),
    )

    # ==========================================================================
    # Player Matching Configuration
    # ==========================================================================

    # PDGA numbers outside this range are treated as typos and dropped
    registry_number_min: int = Field(
        default=1,
        description="Smallest valid PDGA number",
    )
    registry_number_max: int = Field(
        default=999999,
        description="Largest valid PDGA number",
    )

    # ==========================================================================
    # PDGA Configuration
    # ==========================================================================

    pdga_api_url: str = Field(
        default="https://api.pdga.com/services/json",
        description="Base URL of the PDGA JSON API",
    )
    pdga_site_url: str = Field(
        default="https://www.pdga.com",
        description="Base URL of the PDGA website (event pages are scraped)",
    )
    pdga_api_user: Optional[str] = Field(
        default=None,
        description="PDGA API username",
    )
    pdga_api_password: Optional[str] = Field(
        default=None,
        description="PDGA API password",
    )
    pdga_session_ttl_seconds: int = Field(
        default=3600,
        description="How long a PDGA API login is trusted before logging in again",
    )
    pdga_timeout_seconds: float = Field(
        default=30.0,
        description="HTTP timeout for PDGA requests (seconds)",
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # ==========================================================================
    # Validators
    # ==========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("membership_rollover_month")
    @classmethod
    def validate_rollover_month(cls, v: int) -> int:
        if not 1 <= v <= 12:
            raise ValueError("membership_rollover_month must be between 1 and 12")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only load settings once,
    which is important because loading from .env can be slow.
    """
    return Settings()


# Convenience alias for importing
settings = get_settings()
