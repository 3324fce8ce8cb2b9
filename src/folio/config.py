"""Configuration management for Folio."""

from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server configuration
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Runtime environment (development, staging, production)",
    )
    server_name: str = Field(default="folio", description="Service name used in logs")
    server_host: str = Field(default="localhost", description="Server bind host")
    server_port: int = Field(default=3340, description="Server bind port")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Origins allowed to call the API from a browser",
    )

    # Database configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./folio.db",
        description="SQLAlchemy async database URL (sqlite+aiosqlite or postgresql+asyncpg)",
    )
    database_pool_size: int = Field(default=5, ge=1, description="Connection pool size")
    database_max_overflow: int = Field(default=10, ge=0, description="Max overflow connections")
    auto_create_tables: bool = Field(
        default=True,
        description="Create missing tables at startup (disable when running Alembic)",
    )

    # Page cache / revalidation
    page_cache_maxsize: int = Field(default=500, ge=1, description="Max cached public pages")
    page_cache_ttl: float = Field(
        default=300.0, gt=0, description="Seconds before a cached page expires on its own"
    )
    revalidate_url: str = Field(
        default="",
        description="Front-end endpoint notified with stale paths after mutations (optional)",
    )
    revalidate_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Shared secret sent with revalidation requests",
    )
    revalidate_timeout: float = Field(
        default=5.0, gt=0, le=60, description="Revalidation request timeout (seconds)"
    )

    # Upload callbacks
    upload_callback_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Shared secret the storage provider sends with upload callbacks",
    )

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Prevent insecure settings in production."""
        if self.environment == "production":
            if self.is_sqlite:
                raise ValueError(
                    "SQLite is not supported in production. "
                    "Set FOLIO_DATABASE_URL to a postgresql+asyncpg URL."
                )
            if not self.upload_callback_secret.get_secret_value():
                raise ValueError(
                    "FOLIO_UPLOAD_CALLBACK_SECRET is required in production environment."
                )
        return self

    @model_validator(mode="after")
    def validate_revalidation(self) -> "Settings":
        """A revalidation webhook must be authenticated."""
        if self.revalidate_url and not self.revalidate_secret.get_secret_value():
            raise ValueError("FOLIO_REVALIDATE_SECRET is required when FOLIO_REVALIDATE_URL is set")
        return self

    @property
    def is_sqlite(self) -> bool:
        """True when the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


# Global settings instance
settings = Settings()
