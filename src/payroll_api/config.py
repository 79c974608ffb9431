"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import EmailStr, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_DATABASE_SCHEMES = ("postgresql://", "postgres://", "sqlite://")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Payroll API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database (required)
    database_url: str = Field(
        description="PostgreSQL or SQLite connection URL. Must be set via environment variable."
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Payroll
    organization_name: str = "Rwanda Government"
    # reject: a run fails before writing anything if a deduction category has no rule
    # zero: absent categories are applied at 0%
    payroll_missing_deduction_policy: Literal["reject", "zero"] = "reject"

    # SMTP (outbound salary notifications)
    smtp_host: str | None = None
    smtp_port: int = Field(default=587, ge=1, le=65535)
    smtp_username: str | None = None
    smtp_password: SecretStr | None = None
    smtp_from_email: EmailStr | None = None
    smtp_from_name: str = "Payroll Office"
    smtp_use_tls: bool = True

    # Message delivery sweep
    message_delivery_enabled: bool = False
    message_delivery_interval_minutes: int = Field(default=15, ge=1)

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for deployment requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        if not self.database_url.startswith(SUPPORTED_DATABASE_SCHEMES):
            raise ValueError(
                "DATABASE_URL must start with 'postgresql://', 'postgres://' or 'sqlite://'"
            )

        if self.environment == "production" and self.database_backend == "sqlite":
            raise ValueError("SQLite cannot be used in production environment")

        return self

    @property
    def database_backend(self) -> Literal["postgresql", "sqlite"]:
        """Get the database backend name."""
        if self.database_url.startswith("sqlite://"):
            return "sqlite"
        return "postgresql"

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy.

        - postgresql:// and postgres:// use asyncpg (sslmode is renamed to ssl)
        - sqlite:// uses aiosqlite
        """
        url = self.database_url
        if self.database_backend == "sqlite":
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        url = url.replace("postgres://", "postgresql://", 1)
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url.replace("sslmode=", "ssl=")

    @property
    def smtp_configured(self) -> bool:
        """Check whether enough SMTP settings are present to send mail."""
        return bool(self.smtp_host and self.smtp_from_email)

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
