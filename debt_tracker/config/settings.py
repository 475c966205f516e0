"""
Configuration Management for Debt Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Defaults cover every field, so the tracker runs with no .env at all.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from debt_tracker.models.debt import SortKey


class StorageSettings(BaseSettings):
    """Where and under which key the debt list is persisted."""

    model_config = SettingsConfigDict(
        env_prefix="DEBT_TRACKER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="file",
        pattern="^(file|memory)$",
        description="Key-value backend: 'file' or 'memory'"
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding one JSON file per storage key"
    )
    storage_key: str = Field(
        default="financas_debts_v1",
        min_length=1,
        description="Key the serialized debt list is stored under"
    )

    @field_validator("storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """The key becomes a filename, so path separators are not allowed."""
        if "/" in v or "\\" in v or v in {".", ".."}:
            raise ValueError(f"Invalid storage key: {v!r}")
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

    # Logging
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )
    log_format: str = Field(
        default="json",
        pattern="^(json|console)$",
        description="Render logs as JSON lines or for a console"
    )

    # View defaults
    default_sort_key: SortKey = Field(
        default=SortKey.CREATED_AT_DESC,
        description="Sort order used when the UI does not pick one"
    )

    # Display
    currency_symbol: str = Field(
        default="R$",
        description="Currency symbol used when formatting amounts"
    )

    # Validation thresholds
    max_amount_cents: int = Field(
        default=100_000_000,
        ge=1,
        description="Amounts above this produce a warning (not an error)"
    )

    # Backup
    export_filename_prefix: str = Field(
        default="financas-debts-backup",
        description="Prefix of exported backup filenames"
    )
    export_format_version: int = Field(
        default=1,
        ge=1,
        description="Version tag written into exported backups"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


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
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus {name}_error entries
    for the sections that failed. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
