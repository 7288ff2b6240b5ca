"""
Configuration settings for the Studio Tracker backend.

Uses Pydantic settings management for environment variables and configuration.
"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AnyHttpUrl, field_validator
import secrets


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Studio Tracker"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Productivity tracker for design studios: demands, points, awards and lessons"

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12  # one working day

    # Database
    DATABASE_URL: str = "sqlite:///./studio_tracker.db"

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str] | str:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Bootstrap accounts
    FIRST_ADMIN_NAME: str = "Admin"
    FIRST_ADMIN_PASSWORD: str = "admin123"
    DEFAULT_USER_PASSWORD: str = "123"

    # Studio rules
    TIMEZONE: str = "America/Sao_Paulo"
    WORKDAY_START_HOUR: int = 6
    DEFAULT_DAILY_ART_GOAL: int = 8
    DASHBOARD_DAILY_GOAL_FALLBACK: int = 10
    DEFAULT_VARIATION_POINTS: int = 5

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "detailed"  # simple, detailed or json

    # Development settings
    DEBUG: bool = False
    TESTING: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()
