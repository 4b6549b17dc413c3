"""Tests for application configuration.

Settings for database, sessions, hashing cost, email and rate limits.
Tests cover defaults, env var loading, and production security validation.
"""

import pytest
from pydantic import SecretStr, ValidationError

from mydiary.core.config import (
    _INSECURE_DEFAULT_PASSWORD,
    _INSECURE_DEFAULT_SESSION_SECRET,
    Settings,
)

# Reusable test constants
_SECURE_DB_PASSWORD = "my-secure-production-password-123!"
_SECURE_SESSION_SECRET = "s" * 64
_PRODUCTION = "production"


def _production(**overrides) -> Settings:
    values = {
        "environment": _PRODUCTION,
        "database_password": _SECURE_DB_PASSWORD,
        "session_secret": SecretStr(_SECURE_SESSION_SECRET),
        "session_https_only": True,
    }
    values.update(overrides)
    return Settings(**values)


class TestDefaults:
    """Development defaults."""

    def test_argon2_defaults(self):
        s = Settings()
        assert (s.argon2_time_cost, s.argon2_memory_cost, s.argon2_parallelism) == (
            10,
            65536,
            1,
        )

    def test_session_cookie_defaults(self):
        s = Settings()
        assert s.session_cookie_name == "mydiary.session"
        assert s.session_https_only is False

    def test_database_url_built_from_parts(self):
        s = Settings(
            database_user="u",
            database_password="p",
            database_host="db",
            database_port=6543,
            database_name="diary",
        )
        assert s.database_url == "postgresql+asyncpg://u:p@db:6543/diary"

    def test_database_url_override_wins(self):
        s = Settings(database_url_override="sqlite+aiosqlite:///./diary.db")
        assert s.database_url == "sqlite+aiosqlite:///./diary.db"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_LOGIN", "3/minute")
        monkeypatch.setenv("ARGON2_TIME_COST", "4")
        s = Settings()
        assert s.rate_limit_login == "3/minute"
        assert s.argon2_time_cost == 4


class TestArgon2Validation:
    """Cost parameters must be positive in every environment."""

    @pytest.mark.parametrize(
        "field", ["argon2_time_cost", "argon2_memory_cost", "argon2_parallelism"]
    )
    def test_rejects_zero_cost(self, field):
        with pytest.raises(ValidationError, match="ARGON2_"):
            Settings(**{field: 0})


class TestProductionSecurityValidation:
    """Tests for production security requirements."""

    def test_secure_production_settings(self):
        s = _production()
        assert s.environment == _PRODUCTION

    def test_allows_defaults_in_development(self):
        s = Settings(environment="development")
        assert s.database_password == _INSECURE_DEFAULT_PASSWORD

    def test_rejects_default_password_in_production(self):
        with pytest.raises(ValidationError) as exc_info:
            _production(database_password=_INSECURE_DEFAULT_PASSWORD)

        errors = exc_info.value.errors()
        assert len(errors) == 1
        assert "Cannot use default database password in production" in str(
            errors[0]["msg"]
        )

    def test_rejects_default_session_secret(self):
        with pytest.raises(ValidationError, match="default SESSION_SECRET"):
            _production(session_secret=SecretStr(_INSECURE_DEFAULT_SESSION_SECRET))

    def test_rejects_short_session_secret(self):
        with pytest.raises(ValidationError, match="at least 32"):
            _production(session_secret=SecretStr("short"))

    def test_requires_https_only_cookies(self):
        with pytest.raises(ValidationError, match="SESSION_HTTPS_ONLY"):
            _production(session_https_only=False)
