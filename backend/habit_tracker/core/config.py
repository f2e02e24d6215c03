"""
Application configuration and environment variables
"""
import os
from typing import Optional
from dotenv import load_dotenv

from habit_tracker.core.constants import SUGGESTIONS_PATH_DEFAULT, LLM_MODEL_DEFAULT

# Load environment variables
load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    """Read a float env var, treating unset/blank as None"""
    value = os.getenv(name, "").strip()
    return float(value) if value else None


class Settings:
    """Application settings loaded from environment variables"""

    # Habit API (consumed by the CLI)
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000")
    SUGGESTIONS_PATH: str = os.getenv("SUGGESTIONS_PATH", SUGGESTIONS_PATH_DEFAULT)

    # No timeout unless explicitly configured
    REQUEST_TIMEOUT_SECONDS: Optional[float] = _optional_float("REQUEST_TIMEOUT_SECONDS")

    # AI
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", LLM_MODEL_DEFAULT)

    # Misc
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "UTC")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


# Create a global settings instance
settings = Settings()
