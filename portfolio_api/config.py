"""
Configuration management for the FastAPI application.
Uses Pydantic Settings for environment variable management.
"""
from datetime import timedelta
import re

from pydantic import field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL
from typing import List, Union


_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: Union[str, int, timedelta]) -> timedelta:
    """
    Parse a token lifetime such as "3600", "30m", "1h" or "7d".

    Raises:
        ValueError: If the value is not a positive duration
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        seconds = value
        if seconds <= 0:
            raise ValueError("Duration must be positive")
        return timedelta(seconds=seconds)

    match = _DURATION_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount, unit = match.groups()
    if int(amount) <= 0:
        raise ValueError("Duration must be positive")
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Portfolio CMS API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Content management API for the portfolio website"

    # CORS Configuration
    # Use a JSON list in the environment, e.g. CORS_ORIGINS='["https://example.com"]'
    CORS_ORIGINS: List[str] = ["*"]

    # Database Configuration
    # DATABASE_URL wins when set; otherwise the URL is built from the DB_* parts
    DATABASE_URL: str = ""
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_HOST: str = ""
    DB_PORT: int = 5432
    DB_NAME: str = ""

    # JWT Configuration
    # JWT_SECRET should be a long random string (e.g., generated with: openssl rand -hex 32)
    JWT_SECRET: str = "your-secret-key-change-this-in-production-use-openssl-rand-hex-32"
    JWT_EXPIRES_IN: timedelta = timedelta(hours=1)

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Rate limiting for the credential endpoints
    RATE_LIMIT_ENABLED: bool = True

    @field_validator("JWT_EXPIRES_IN", mode="before")
    @classmethod
    def validate_expires_in(cls, v):
        return parse_duration(v)

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL, or an empty string when no database is configured."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if not self.DB_HOST:
            return ""
        return URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER or None,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME or None,
        ).render_as_string(hide_password=False)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


# Global settings instance
settings = Settings()
