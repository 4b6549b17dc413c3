"""Application configuration loaded from environment variables.

Settings for the database, session cookies, password hashing cost, email
delivery, and rate limiting. Uses pydantic-settings for validation and
.env file support.
"""

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Known insecure defaults that must not be used in production
# Security: Runtime check in check_production_security() prevents use in production
_INSECURE_DEFAULT_PASSWORD = "mydiary_dev_password"  # nosec B105
_INSECURE_DEFAULT_SESSION_SECRET = "mydiary-dev-session-secret-change-me"  # nosec B105

# Minimum length for SESSION_SECRET in production (256 bits = 32 bytes)
_MIN_SESSION_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "mydiary"
    database_user: str = "mydiary_user"
    database_password: str = _INSECURE_DEFAULT_PASSWORD
    # Full SQLAlchemy URL; takes precedence over the parts above when set
    database_url_override: str = ""

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Sessions (signed cookie, Starlette SessionMiddleware)
    session_secret: SecretStr = SecretStr(_INSECURE_DEFAULT_SESSION_SECRET)
    session_cookie_name: str = "mydiary.session"
    session_https_only: bool = False
    session_max_age_seconds: int = 60 * 60 * 8

    # Password / verification code hashing (Argon2id)
    argon2_time_cost: int = 10
    argon2_memory_cost: int = 65536  # KiB
    argon2_parallelism: int = 1

    # Email
    email_from: str = "verification@mydiary.com"
    resend_api_key: SecretStr = SecretStr("")
    verification_email_subject: str = "MY DIARY : Your Verification Code"

    # Rate Limiting (Security)
    # Format: "count/period" (e.g., "10/minute", "3/hour")
    rate_limit_login: str = "10/minute"
    rate_limit_registration: str = "5/hour"
    rate_limit_email: str = "5/15minute"
    rate_limit_enabled: bool = True

    @property
    def database_url(self) -> str:
        """Async database URL for SQLAlchemy."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Validate production security requirements.

        Security: Prevents deployment with known insecure defaults.
        Checks:
        - Argon2 cost parameters must be positive (all environments)
        - Database password must not be the default in production
        - SESSION_SECRET must not be the default and must be >= 32 chars
          in production
        - Session cookie must be HTTPS-only in production
        """
        if min(
            self.argon2_time_cost, self.argon2_memory_cost, self.argon2_parallelism
        ) < 1:
            msg = "ARGON2_* cost parameters must be positive integers."
            raise ValueError(msg)

        if self.environment == "production":
            if self.database_password == _INSECURE_DEFAULT_PASSWORD:
                msg = (
                    "Cannot use default database password in production. "
                    "Set DATABASE_PASSWORD environment variable to a secure value."
                )
                raise ValueError(msg)

            secret_value = self.session_secret.get_secret_value()
            if secret_value == _INSECURE_DEFAULT_SESSION_SECRET:
                msg = (
                    "Cannot use default SESSION_SECRET in production. "
                    'Generate with: python -c "import secrets; '
                    'print(secrets.token_hex(32))"'
                )
                raise ValueError(msg)
            if len(secret_value) < _MIN_SESSION_SECRET_LENGTH:
                msg = (
                    f"SESSION_SECRET must be at least {_MIN_SESSION_SECRET_LENGTH} "
                    "characters for adequate security."
                )
                raise ValueError(msg)

            if not self.session_https_only:
                msg = "SESSION_HTTPS_ONLY must be true in production."
                raise ValueError(msg)

        return self


settings = Settings()
