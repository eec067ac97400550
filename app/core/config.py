"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, signing secret, port)
- Validates configuration on startup
- Environment-specific settings
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Built once at startup and handed to the components that need it.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="addressbook",
        description="MongoDB database name"
    )

    # Tokens
    JWT_SECRET: Optional[str] = Field(
        default=None,
        description="Secret used to sign bearer tokens (required)"
    )
    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="Token signing algorithm"
    )

    # Server
    HOST: str = Field(default="0.0.0.0", description="Bind address")
    PORT: int = Field(default=5000, description="Listening port")

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    STATIC_DIR: str = Field(
        default="dist",
        description="Directory holding the single-page frontend build"
    )

    @field_validator("JWT_SECRET")
    @classmethod
    def blank_secret_is_missing(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty or whitespace-only secret as not set."""
        if v is None or not v.strip():
            return None
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Returns the process-wide settings, reading the environment once."""
    return Settings()


def validate_settings(settings: Settings) -> bool:
    """
    Validates critical settings on application startup.
    Raises ConfigurationError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.JWT_SECRET:
        errors.append("JWT_SECRET is required")

    if not settings.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if settings.JWT_SECRET and settings.is_production and len(settings.JWT_SECRET) < 32:
        errors.append("JWT_SECRET must be at least 32 characters in production")

    if errors:
        raise ConfigurationError(f"Configuration validation failed: {', '.join(errors)}")

    return True
