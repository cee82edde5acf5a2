"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "solarbooks.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class CompanySettings(BaseSettings):
    """Issuing company details printed on documents and used for GST."""

    model_config = SettingsConfigDict(env_prefix="COMPANY_")

    name: str = "Shine Solar Solutions"
    gstin: str = ""  # first two digits decide intra- vs inter-state supply
    state: str = "Karnataka"
    address: str = ""
    phone: str = ""
    email: str = ""

    @field_validator("gstin")
    @classmethod
    def normalize_gstin(cls, v: str) -> str:
        return v.strip().upper()


class BillingSettings(BaseSettings):
    """Document numbering and billing defaults."""

    model_config = SettingsConfigDict(env_prefix="BILLING_")

    invoice_prefix: str = "SS/INV"
    quotation_prefix: str = "QUO"
    number_digits: int = 3
    default_tcs_rate: Decimal = Field(default=Decimal("0"), ge=0, le=10)
    quotation_validity_days: int = 30
    payment_terms_days: int = 15


class PdfSettings(BaseSettings):
    """PDF rendering configuration."""

    model_config = SettingsConfigDict(env_prefix="PDF_")

    footer_text: str = "This is a computer generated document."
    logo_path: str = ""
    bank_details: str = ""


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "SolarBooks"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    company: CompanySettings = Field(default_factory=CompanySettings)
    billing: BillingSettings = Field(default_factory=BillingSettings)
    pdf: PdfSettings = Field(default_factory=PdfSettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
