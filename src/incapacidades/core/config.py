"""Configuration management for the Incapacidades API.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ACCESS_TOKEN_SECRET = "change-me-access-token-secret-use-openssl-rand-hex-32"
DEFAULT_REFRESH_TOKEN_SECRET = "change-me-refresh-token-secret-use-openssl-rand-hex-32"


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables prefixed with
    ``INCAPACIDADES_`` and from a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INCAPACIDADES_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Sistema de Incapacidades"
    app_version: str = "1.0.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/incapacidades.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Token Settings
    access_token_secret: str = Field(
        default=DEFAULT_ACCESS_TOKEN_SECRET,
        description="Secret used to sign access tokens",
    )
    refresh_token_secret: str = Field(
        default=DEFAULT_REFRESH_TOKEN_SECRET,
        description="Secret used to sign refresh tokens (must differ from the access secret)",
    )
    access_token_expire_minutes: int = Field(default=60, ge=1)
    refresh_token_expire_days: int = Field(default=7, ge=1)
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    jwt_issuer: str = "incapacidades"
    refresh_token_revocation_enabled: bool = Field(
        default=True,
        description="Keep a denylist of consumed and logged-out refresh tokens",
    )

    # Password Hashing Settings (argon2id)
    password_hash_time_cost: int = Field(default=3, ge=1)
    password_hash_memory_cost: int = Field(default=65536, ge=8)  # KiB
    password_hash_parallelism: int = Field(default=4, ge=1)

    # CORS Settings
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
    cors_allow_credentials: bool = True

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Pagination
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    # Default Administrator
    default_admin_email: str | None = Field(
        default=None,
        description="Email of the administrator ensured on startup (skipped if unset)",
    )
    default_admin_password: str | None = None
    default_admin_full_name: str = "Administrador del Sistema"
    default_admin_national_id: str = "1000000001"
    default_admin_phone: str | None = "3001234567"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @model_validator(mode="after")
    def validate_token_secrets(self) -> "Settings":
        """Access and refresh tokens must never be signed with the same secret."""
        if self.access_token_secret == self.refresh_token_secret:
            raise ValueError(
                "access_token_secret and refresh_token_secret must be different"
            )
        if self.is_production and (
            self.access_token_secret == DEFAULT_ACCESS_TOKEN_SECRET
            or self.refresh_token_secret == DEFAULT_REFRESH_TOKEN_SECRET
        ):
            raise ValueError("Default token secrets cannot be used in production")
        return self

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1."
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
