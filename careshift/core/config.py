# careshift/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic import validator


class Settings(BaseSettings):
    """Application settings loaded from .env"""

    # === Database ===
    DATABASE_URL: str = "sqlite+aiosqlite:///./careshift.db"
    DATABASE_ECHO: bool = False

    @validator("DATABASE_URL")
    def validate_database_url(cls, v):
        """Ensure database URL is safe for current environment"""
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and "localhost" in v:
            raise ValueError("Production environment cannot use localhost database!")
        return v

    # === System ===
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    TIMEZONE: str = "UTC"

    # === Business Rules ===
    DEFAULT_REGULAR_RATE: float = 15.0
    OVERTIME_RATE_MULTIPLIER: float = 1.5
    DEFAULT_SHIFT_LOCATION: str = "Patient's home"
    MAX_GENERATION_DAYS: int = 93

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Create a global settings instance
settings = Settings()
