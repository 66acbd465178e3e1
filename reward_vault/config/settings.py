"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reward_vault.config.constants import (
    DEFAULT_ENCRYPTION_SALT,
    DEFAULT_REWARD_EXPIRY_DAYS,
    DEVELOPMENT_ENCRYPTION_SECRET,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./reward_vault.db"
    database_echo: bool = False

    # Credential encryption
    # Rotating this secret makes every stored credential undecryptable
    encryption_secret: str = DEVELOPMENT_ENCRYPTION_SECRET
    encryption_salt: str = DEFAULT_ENCRYPTION_SALT

    # Application
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = "logs/reward_vault.log"

    # Inventory lifecycle
    reward_expiry_days: int = Field(
        default=DEFAULT_REWARD_EXPIRY_DAYS,
        gt=0,
        description="Days an AVAILABLE reward account may sit unassigned before it expires",
    )

    # Audit trail
    audit_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Post-commit retry attempts for audit entries that failed to write",
    )
    audit_retry_delay_seconds: float = Field(
        default=0.2,
        ge=0,
        description="Base delay for exponential backoff between audit retries",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level name."""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Validate production-specific requirements."""
        if self.environment == "production":
            if self.debug:
                raise ValueError(
                    "DEBUG must be False in production environment. "
                    "Set DEBUG=false in your .env file."
                )

            if self.encryption_secret == DEVELOPMENT_ENCRYPTION_SECRET:
                raise ValueError(
                    "ENCRYPTION_SECRET is required in production environment. "
                    "Generate one with: openssl rand -hex 32"
                )

            if len(self.encryption_secret) < 32:
                raise ValueError(
                    "ENCRYPTION_SECRET must be at least 32 characters in "
                    "production. Generate one with: openssl rand -hex 32"
                )

            if self.database_url.startswith("sqlite"):
                logger.warning(
                    "DATABASE_URL points at SQLite in production. "
                    "Concurrent assignment relies on row-level locking; use PostgreSQL."
                )
        elif self.encryption_secret == DEVELOPMENT_ENCRYPTION_SECRET:
            logger.warning(
                "ENCRYPTION_SECRET not set - using development default (DEV ONLY)"
            )

        return self


settings = Settings()
