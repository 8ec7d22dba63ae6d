"""
Service configuration read from the environment and an optional ``.env``.

Nested groups use their own prefixes, e.g. ``STORAGE_DATA_DIR``,
``BILLING_INVOICE_NUMBER_PADDING`` and ``API_PORT``.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "billing.db"
    pool_size: int = Field(default=5, ge=1)
    busy_timeout: int = Field(default=30000, ge=0, description="milliseconds")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class BillingSettings(BaseSettings):
    """Numbering format for billing documents."""

    model_config = SettingsConfigDict(env_prefix="BILLING_")

    invoice_number_padding: int = Field(default=4, ge=1, le=10)
    quotation_prefix: str = "Q-"


class APISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Events Billing Back Office"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    storage: StorageSettings = Field(default_factory=StorageSettings, validate_default=True)
    billing: BillingSettings = Field(default_factory=BillingSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="after")
    @classmethod
    def create_data_dir(cls, storage: StorageSettings) -> StorageSettings:
        storage.data_dir.mkdir(parents=True, exist_ok=True)
        return storage


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, loaded on first call."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the loaded settings so the next call re-reads the environment."""
    global _settings
    _settings = None
