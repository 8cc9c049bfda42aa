"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

import re
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Defaults that must be overridden outside development
INSECURE_ACCESS_SECRET = "dev-secret-change-in-production"
INSECURE_REFRESH_SECRET = "dev-refresh-secret-change-in-production"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> int:
    """
    Convert a duration string such as "15m" or "7d" into seconds.

    A bare number is taken as seconds.

    Raises:
        ValueError: If the string is not a recognised duration
    """
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _DURATION_UNITS[unit.lower()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database: DATABASE_URL wins over the discrete variables
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_username: str = "postgres"
    db_password: str = "postgres"
    db_database: str = "user_management"

    # Security
    jwt_access_secret: str = INSECURE_ACCESS_SECRET
    jwt_access_expiration: str = "15m"
    jwt_refresh_secret: str = INSECURE_REFRESH_SECRET
    jwt_refresh_expiration: str = "7d"
    jwt_algorithm: str = "HS256"

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    port: int = 3000
    cors_origin: str = "*"

    # API Settings
    api_prefix: str = "/api"
    project_name: str = "User Management API"
    version: str = "1.0.0"

    @field_validator("jwt_access_expiration", "jwt_refresh_expiration")
    @classmethod
    def validate_duration(cls, v: str) -> str:
        parse_duration(v)
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = v.strip().strip("/")
        return f"/{v}" if v else ""

    @property
    def sqlalchemy_database_url(self) -> str:
        """Async SQLAlchemy URL, built from discrete settings when DATABASE_URL is unset."""
        if self.database_url:
            url = self.database_url
            for prefix in ("postgres://", "postgresql://"):
                if url.startswith(prefix):
                    return "postgresql+asyncpg://" + url[len(prefix):]
            return url
        return (
            f"postgresql+asyncpg://{self.db_username}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_database}"
        )

    @property
    def alembic_database_url(self) -> str:
        """Database URL with "%" doubled for alembic.ini (ConfigParser) interpolation."""
        return self.sqlalchemy_database_url.replace("%", "%%")

    @property
    def access_token_expire_seconds(self) -> int:
        return parse_duration(self.jwt_access_expiration)

    @property
    def refresh_token_expire_seconds(self) -> int:
        return parse_duration(self.jwt_refresh_expiration)

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origin.split(",") if o.strip()]

    def insecure_defaults(self) -> List[str]:
        """Names of secrets still set to their development defaults."""
        names = []
        if self.jwt_access_secret == INSECURE_ACCESS_SECRET:
            names.append("JWT_ACCESS_SECRET")
        if self.jwt_refresh_secret == INSECURE_REFRESH_SECRET:
            names.append("JWT_REFRESH_SECRET")
        if not self.database_url and self.db_password == "postgres":
            names.append("DB_PASSWORD")
        return names


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
