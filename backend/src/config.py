"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST set the SMTP credentials and EMAIL_TO.

    Environment Variables:
        DATABASE_URL: SQLAlchemy connection string (PostgreSQL or SQLite)
        AUTO_CREATE_TABLES: Create missing tables on startup (default True)
        SMTP_HOST / SMTP_PORT: Outbound mail server
        SMTP_SECURE: Use implicit TLS (SMTPS) instead of STARTTLS
        SMTP_USER / SMTP_PASSWORD: Mail server credentials
        MAIL_FROM_ADDRESS: Envelope sender (defaults to SMTP_USER)
        EMAIL_TO: Administrator address receiving verified submissions
        FRONTEND_URL: Base URL of the site hosting /verify-email
        CORS_ORIGINS: Comma separated allowed origins (defaults to FRONTEND_URL)
        VERIFICATION_TOKEN_TTL_HOURS: Verification link lifetime (default 24)
        LOG_LEVEL: Logging level (default INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///./contactflow.db"
    AUTO_CREATE_TABLES: bool = True

    # Outbound mail (SMTP)
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 587
    SMTP_SECURE: bool = False
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_TIMEOUT_SECONDS: float = 10.0
    MAIL_FROM_ADDRESS: Optional[str] = None
    MAIL_FROM_NAME: str = "ContactFlow"

    # Contact flow
    EMAIL_TO: str = "admin@localhost"
    FRONTEND_URL: str = "http://localhost:3000"
    CORS_ORIGINS: Optional[str] = None
    VERIFICATION_TOKEN_TTL_HOURS: int = 24
    VERIFICATION_TOKEN_BYTES: int = 32

    # Application
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def sender_address(self) -> str:
        """Address used in the From header of outgoing mail."""
        return self.MAIL_FROM_ADDRESS or self.SMTP_USER or "no-reply@localhost"

    @property
    def allowed_origins(self) -> List[str]:
        raw = self.CORS_ORIGINS or self.FRONTEND_URL
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
