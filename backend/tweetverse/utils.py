"""
Shared utility functions for the TweetVerse backend.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from tweetverse.config import LOG_FORMAT, settings


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def setup_logging(log_level: str | None = None) -> None:
    """Configure root logging once for the service."""
    level = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
