"""
QuickNotes Backend — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Imported by the app factory, the store builder and the entry point.
When:  Loaded once at module import time.

Every value has a development default and can be overridden by an
environment variable of the same name (case-insensitive):

    DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME   → store location
    DATABASE_URL                                      → full URL override
    HOST, PORT                                        → listening socket
    STARTUP_MAX_ATTEMPTS, STARTUP_RETRY_INTERVAL      → readiness gate
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    db_host: str = Field(default="db")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="notesuser")
    db_password: str = Field(default="notespass")
    db_name: str = Field(default="notesdb")

    # Full async SQLAlchemy URL. When unset it is assembled from the
    # DB_* fields above (see `database_url`).
    database_url_override: Optional[str] = Field(
        default=None,
        validation_alias="DATABASE_URL",
        description="Async SQLAlchemy connection URL",
    )

    # Bounded pool: at most db_pool_size connections, no overflow.
    # Callers wait up to db_pool_timeout seconds for a free connection.
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_pool_timeout: float = Field(default=30.0, gt=0)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Startup Readiness Gate ────────────────────────────────────────────
    # Fixed interval, bounded attempts. Exhaustion is fatal.
    startup_max_attempts: int = Field(default=10, ge=1, le=100)
    startup_retry_interval: float = Field(default=3.0, ge=0)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)
    api_prefix: str = Field(default="/api")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list of origins, "*" for any.
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Normalizes the prefix to '/segment' form (no trailing slash)."""
        v = "/" + v.strip().strip("/")
        return "" if v == "/" else v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # DB_HOST and db_host both work
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        """
        What:  The effective async connection URL.
        How:   DATABASE_URL wins when set; otherwise the URL is built for the
               asyncpg driver from the DB_* fields.
        """
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


# Module-level instance imported throughout the application
settings = Settings()
