"""
Library configuration loaded from environment variables.

Variables use the ``PAYBYSQUARE_`` prefix, e.g. ``PAYBYSQUARE_LOG_LEVEL``.
Use a .env file for local development.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Defaults for new payment requests and validator behaviour.

    Only values that callers may legitimately tune live here. Format limits
    (IBAN length, symbol lengths, QR size bounds) are fixed by the
    PayBySquare standard and are not configurable.
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYBYSQUARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Builder defaults
    default_currency: str = Field(
        default="EUR",
        description="Currency applied by the request builder"
    )
    default_qr_size: int = Field(
        default=300,
        description="QR size in pixels applied by the request builder"
    )
    default_with_frame: bool = Field(
        default=True,
        description="Whether the builder asks the renderer for a frame"
    )

    # Validation
    option_mismatch_severity: Literal["error", "warning"] = Field(
        default="error",
        description=(
            "Severity of a standing order or direct debit that has no "
            "matching entry in paymentOptions"
        ),
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level used by the command line tool"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings.

    Settings are read once and reused, so every builder and validator
    created in a process sees the same configuration.
    """
    return Settings()
