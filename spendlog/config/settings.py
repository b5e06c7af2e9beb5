"""
Configuration Management for spendlog

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every knob (ledger location, output formatting, logging) is validated
once at startup, so a typo in the environment fails loudly.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Ledger storage and report settings.

    Loads configuration from SPENDLOG_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPENDLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    ledger_path: Path = Field(
        default=Path("GeneralLedger.json"),
        description="Path to the JSON ledger file"
    )
    atomic_writes: bool = Field(
        default=False,
        description=(
            "Write through a temporary file and rename it over the ledger. "
            "Opt-in; concurrent appends are still last-writer-wins."
        )
    )

    # Report formatting
    currency_symbol: str = Field(
        default="$",
        max_length=5,
        description="Symbol printed before every amount"
    )
    separator_width: int = Field(
        default=24,
        ge=8,
        le=120,
        description="Width of the dashed separator lines"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for diagnostic logs written to stderr"
    )
    log_format: str = Field(
        default="console",
        pattern="^(console|json)$",
        description="Render logs for humans (console) or machines (json)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
