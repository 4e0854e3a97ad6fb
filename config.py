"""
Configuration module - loads all settings from environment variables.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
try:
    load_dotenv()
except Exception as e:
    print(f"Warning: Failed to load .env file: {e}")
    print("Continuing with environment variables or defaults...")


class Config:
    """Application configuration loaded from environment variables."""

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Safely parse integer environment variable."""
        try:
            return int(os.getenv(key, str(default)))
        except (ValueError, TypeError) as e:
            print(f"Warning: Invalid integer for {key}, using default {default}: {e}")
            return default

    @staticmethod
    def _get_list(key: str, default: str) -> List[str]:
        """Parse a comma-separated environment variable."""
        raw = os.getenv(key, default)
        return [item.strip() for item in raw.split(",") if item.strip()]

    # fal.ai provider credential
    FAL_KEY: str = os.getenv("FAL_KEY", "")

    # CORS
    CORS_ORIGINS: List[str] = _get_list.__func__("CORS_ORIGINS", "*")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: str = os.getenv("LOG_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs"))
    LOG_RETENTION_DAYS: int = _get_int.__func__("LOG_RETENTION_DAYS", 10)

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = _get_int.__func__("PORT", 8000)

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        if not cls.FAL_KEY:
            raise ValueError("FAL_KEY not configured. Please set FAL_KEY environment variable.")
