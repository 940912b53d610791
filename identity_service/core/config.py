"""
Configuration management using Pydantic Settings.

Type-safe configuration loaded from environment variables. Every security
tunable of the identity core (lockout threshold and window, code lifetime
and attempt ceiling, session lifetime, hash cost factor) lives here so it
can be adjusted per deployment without code changes.

Usage:
    from identity_service.core.config import settings

    threshold = settings.lockout_threshold
    if settings.is_development:
        ...
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from identity_service.core.enums import Environment


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Values from a local .env file
        3. Default values (only for non-sensitive config)
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, detailed errors)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(default="Identity Service", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    api_v1_prefix: str = Field(default="/api/v1", description="API v1 route prefix")
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Public base URL, used to build problem type URIs",
    )

    # Database configuration
    database_url: str = Field(
        description="Async database URL (postgresql+asyncpg://... or sqlite+aiosqlite://...)",
    )
    db_echo: bool = Field(
        default=False,
        description="Log all SQL queries (debugging only)",
    )

    # Security configuration
    secret_key: str = Field(
        description="Secret key used to HMAC one-time codes before storage",
    )
    bcrypt_rounds: int = Field(
        default=12,
        description="Bcrypt cost factor for password hashing (12 = ~250ms)",
    )

    # Lockout policy
    lockout_threshold: int = Field(
        default=5,
        description="Consecutive failed logins that lock the account",
    )
    lockout_duration_minutes: int = Field(
        default=15,
        description="Minutes until a locked account unlocks itself (0 = manual unlock only)",
    )

    # One-time codes (email verification and password reset)
    verification_code_ttl_minutes: int = Field(
        default=15,
        description="Lifetime of a verification or reset code",
    )
    verification_max_attempts: int = Field(
        default=5,
        description="Failed submissions allowed per issued code",
    )
    verification_resend_interval_seconds: int = Field(
        default=60,
        description="Minimum delay between two code deliveries to the same account",
    )

    # Sessions
    session_ttl_days: int = Field(
        default=30,
        description="Session lifetime in days",
    )

    # Notifications
    notification_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound for a single notification dispatch",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        """
        Validate bcrypt rounds are within bcrypt's accepted range.

        Raises:
            ValueError: If rounds are not between 4 and 31.
        """
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v

    @field_validator(
        "lockout_threshold",
        "verification_max_attempts",
        "verification_code_ttl_minutes",
        "session_ttl_days",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero or negative limits."""
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @field_validator("lockout_duration_minutes", "verification_resend_interval_seconds")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Reject negative durations."""
        if v < 0:
            raise ValueError("value must not be negative")
        return v

    @field_validator("api_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Remove trailing slashes from URLs."""
        return v.rstrip("/")

    @property
    def lockout_duration(self) -> timedelta | None:
        """Auto-unlock window, or None when unlocking is manual only."""
        if self.lockout_duration_minutes == 0:
            return None
        return timedelta(minutes=self.lockout_duration_minutes)

    @property
    def verification_code_ttl(self) -> timedelta:
        return timedelta(minutes=self.verification_code_ttl_minutes)

    @property
    def verification_resend_interval(self) -> timedelta:
        return timedelta(seconds=self.verification_resend_interval_seconds)

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(days=self.session_ttl_days)

    @property
    def is_development(self) -> bool:
        """True if environment is DEVELOPMENT."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """True if environment is TESTING."""
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """True if environment is PRODUCTION."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()  # type: ignore[call-arg]  # Pydantic Settings loads from env


# Global settings instance (singleton pattern)
settings = get_settings()
