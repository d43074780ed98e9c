"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from incapacidades.core.config import (
    DEFAULT_ACCESS_TOKEN_SECRET,
    DEFAULT_REFRESH_TOKEN_SECRET,
    Settings,
)


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("INCAPACIDADES_ENVIRONMENT", raising=False)
    monkeypatch.delenv("INCAPACIDADES_DATABASE_URL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.environment == "development"
    assert settings.api_prefix == "/api/v1"
    assert settings.access_token_expire_minutes == 60
    assert settings.refresh_token_expire_days == 7
    assert settings.refresh_token_revocation_enabled is True
    assert settings.is_development is True
    assert settings.access_token_secret != settings.refresh_token_secret


def test_env_override(monkeypatch):
    monkeypatch.setenv("INCAPACIDADES_PORT", "9000")
    monkeypatch.setenv("INCAPACIDADES_ACCESS_TOKEN_EXPIRE_MINUTES", "15")

    settings = Settings(_env_file=None)

    assert settings.port == 9000
    assert settings.access_token_expire_minutes == 15


def test_cors_origins_parsing():
    settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")

    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_secrets_must_differ():
    with pytest.raises(ValidationError, match="must be different"):
        Settings(_env_file=None, access_token_secret="same", refresh_token_secret="same")


def test_default_secrets_rejected_in_production():
    with pytest.raises(ValidationError, match="Default token secrets"):
        Settings(
            _env_file=None,
            environment="production",
            access_token_secret=DEFAULT_ACCESS_TOKEN_SECRET,
            refresh_token_secret=DEFAULT_REFRESH_TOKEN_SECRET,
        )


def test_production_with_custom_secrets():
    settings = Settings(
        _env_file=None,
        environment="production",
        access_token_secret="a" * 32,
        refresh_token_secret="b" * 32,
    )

    assert settings.is_production is True


def test_sqlite_rejects_multiple_workers():
    with pytest.raises(ValidationError, match="SQLite does not support multiple worker"):
        Settings(_env_file=None, workers=4, database_url="sqlite+aiosqlite:///./x.db")


def test_postgres_allows_multiple_workers():
    settings = Settings(
        _env_file=None,
        workers=4,
        database_url="postgresql+asyncpg://u:p@localhost/db",
    )

    assert settings.workers == 4
