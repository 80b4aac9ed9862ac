"""
backend/workhive/core/config.py

Application Configuration Loader

Loads and manages application settings from environment variables
using Pydantic's BaseSettings with `.env` support.
Provides strict type validation and environment-specific handling.
"""

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# Base Directory Calculation
# ---------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent
DEFAULT_DOTENV_PATH = BASE_DIR / ".env"


# ---------------------------------------------------
# Settings Definition
# ---------------------------------------------------
class Settings(BaseSettings):
    """
    Application-wide settings loaded from environment variables.
    """

    # --- Pydantic Settings Configuration ---
    model_config = SettingsConfigDict(
        env_file=str(DEFAULT_DOTENV_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- General Application Settings ---
    APP_NAME: str = "Workhive API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # --- Database Settings ---
    DATABASE_URL: str = "sqlite+aiosqlite:///./workhive.db"
    TEST_DATABASE_URL: str = "sqlite+aiosqlite:///./workhive_test.db"
    DB_CREATE_ALL: bool = False

    # --- JWT Authentication Settings ---
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # --- Redis Settings ---
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    # --- CORS Settings ---
    CORS_ALLOWED_ORIGINS: str = ""

    # --- Job Lifecycle Settings ---
    JOB_COMPLETION_POLICY: Literal["client", "mutual"] = "client"
    TRANSITION_MAX_ATTEMPTS: int = Field(default=3, ge=1)

    # --- Calculated Properties ---
    @property
    def cors_origins(self) -> list[str]:
        """Parses the CORS_ALLOWED_ORIGINS string into a list."""
        if not self.CORS_ALLOWED_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def db_url(self) -> str:
        """
        Returns the appropriate database URL based on the testing environment.
        """
        is_testing = os.getenv("PYTEST_CURRENT_TEST") is not None
        url_str = self.TEST_DATABASE_URL if is_testing else self.DATABASE_URL
        if self.DEBUG:
            logger.debug(f"[CONFIG] Using DATABASE URL: {url_str}")
        return url_str

    @property
    def log_path(self) -> Path:
        """Returns the absolute path to the log directory."""
        path = Path(self.LOG_DIR)
        return path if path.is_absolute() else BASE_DIR / path

    @property
    def redis_url(self) -> str:
        """Constructs Redis URL from individual components."""
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


# ---------------------------------------------------
# Instantiate Settings Globally
# ---------------------------------------------------
settings = Settings()
