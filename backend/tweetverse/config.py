"""
Application configuration with environment variable support.
"""
from __future__ import annotations

import os

from pydantic_settings import BaseSettings


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable with fallback."""
    try:
        return int(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_list(key: str, default: list[str], separator: str = ",") -> list[str]:
    """Get list value from environment variable with fallback."""
    value = os.getenv(key)
    if not value:
        return default
    return [item.strip() for item in value.split(separator) if item.strip()]


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    MAX_UPLOAD_MB: int = 20


settings = Settings(_env_file=".env", _env_file_encoding="utf-8")


# Word frequency
WORD_CLOUD_LIMIT: int = _get_env_int("WORD_CLOUD_LIMIT", 100)
SUMMARY_TOP_WORDS: int = _get_env_int("SUMMARY_TOP_WORDS", 10)
HOT_TOPIC_LIMIT: int = _get_env_int("HOT_TOPIC_LIMIT", 5)
# Tokens shorter than this are dropped (i.e. length <= 2)
MIN_TOKEN_LENGTH: int = 3

# Fallback span used when a dataset has no usable timestamps
DEFAULT_RANGE_DAYS: int = 7

# Input format
REQUIRED_COLUMNS: tuple[str, ...] = ("date", "time", "translated_text", "compound", "sentiment")
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "translated_text": ("translatedText",),
}
ALLOWED_EXTENSIONS: tuple[str, ...] = (".csv",)

# CORS Configuration
CORS_ALLOW_ORIGINS: list[str] = _get_env_list("CORS_ALLOW_ORIGINS", ["*"])

# Logging Configuration
LOG_FORMAT: str = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
