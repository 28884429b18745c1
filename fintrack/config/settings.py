"""
Configuration Management for FinTrack

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Ledger limits (starting balance, transaction ceiling, history size)
live in one place and are validated at startup.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Ledger rules and display configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    starting_balance: Decimal = Field(
        default=Decimal("1250.00"),
        ge=0,
        description="Balance every new account starts with"
    )
    max_transaction_amount: Decimal = Field(
        default=Decimal("999999.99"),
        gt=0,
        description="Largest amount accepted for a single transfer or receipt"
    )
    history_capacity: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Number of history entries kept (oldest evicted first)"
    )
    max_login_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Failed logins allowed before the session ends"
    )
    currency_symbol: str = Field(
        default="R$",
        min_length=1,
        max_length=5,
        description="Symbol used when rendering amounts"
    )
    display_datetime_format: str = Field(
        default="%d/%m/%Y %H:%M",
        description="strftime format for timestamps shown to the user"
    )

    @field_validator('display_datetime_format')
    @classmethod
    def validate_datetime_format(cls, v: str) -> str:
        """Reject formats without any directive (they would render a constant)."""
        if "%" not in v:
            raise ValueError(f"Datetime format has no directives: {v!r}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for each section that failed.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.ledger
        results["ledger"] = True
    except Exception as e:
        results["ledger"] = False
        results["ledger_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
