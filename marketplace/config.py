"""Configuration settings for the marketplace API."""

import os
import secrets
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Built once per process (see get_settings) and passed to every service,
    so nothing re-reads the environment while handling a request.
    """

    # Database
    DATABASE_URL: str = field(default_factory=lambda: _env("DATABASE_URL", "sqlite:///./marketplace.db"))

    # JWT
    JWT_SECRET_KEY: str = field(default_factory=lambda: _env("JWT_SECRET"))
    JWT_ALGORITHM: str = field(default_factory=lambda: _env("JWT_ALGORITHM", "HS256"))
    TOKEN_EXPIRE_DAYS: int = field(default_factory=lambda: int(_env("TOKEN_EXPIRE_DAYS", "7")))

    # Password reset
    OTP_EXPIRE_MINUTES: int = field(default_factory=lambda: int(_env("OTP_EXPIRE_MINUTES", "15")))

    # Email
    EMAIL_BACKEND: str = field(default_factory=lambda: _env("EMAIL_BACKEND"))
    EMAIL_HOST: str = field(default_factory=lambda: _env("EMAIL_HOST"))
    EMAIL_PORT: int = field(default_factory=lambda: int(_env("EMAIL_PORT", "587")))
    EMAIL_FROM: str = field(default_factory=lambda: _env("EMAIL_FROM", "no-reply@example.com"))
    EMAIL_USER: str = field(default_factory=lambda: _env("EMAIL_USER"))
    EMAIL_PASSWORD: str = field(default_factory=lambda: _env("EMAIL_PASSWORD"))
    EMAIL_REGISTRATION_URL: str = field(
        default_factory=lambda: _env("EMAIL_REGISTRATION_URL", "http://localhost:4000/api/v1/auth/confirm")
    )

    # Application
    HOST: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    PORT: int = field(default_factory=lambda: int(_env("PORT", "4000")))
    APP_ENV: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    DEBUG: bool = field(default_factory=lambda: _env("DEBUG", "false").lower() == "true")

    # Set when JWT_SECRET was missing and a random key was generated
    jwt_secret_generated: bool = False

    def __post_init__(self) -> None:
        if not self.JWT_SECRET_KEY:
            object.__setattr__(self, "JWT_SECRET_KEY", secrets.token_urlsafe(32))
            object.__setattr__(self, "jwt_secret_generated", True)
        if not self.EMAIL_BACKEND:
            object.__setattr__(self, "EMAIL_BACKEND", "smtp" if self.EMAIL_HOST else "console")

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        errors = []
        if self.jwt_secret_generated:
            errors.append("JWT_SECRET is not set - using auto-generated key (not persistent across restarts)")
        if self.EMAIL_BACKEND == "console":
            errors.append("EMAIL_BACKEND is 'console' - confirmation and reset emails are only logged")
        elif self.EMAIL_BACKEND == "smtp" and not self.EMAIL_HOST:
            errors.append("EMAIL_BACKEND is 'smtp' but EMAIL_HOST is not set")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
