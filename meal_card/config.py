"""
Application configuration.

All configuration is loaded from environment variables.
The default database is an in-memory SQLite database, so
every process starts from a fresh, seeded store.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Meal Card Manager"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Store
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://")
    SEED_DATA: bool = os.getenv("SEED_DATA", "true").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Business
    TOP_ITEMS_LIMIT: int = int(os.getenv("TOP_ITEMS_LIMIT", "5"))


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
