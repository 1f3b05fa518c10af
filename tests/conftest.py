"""
Shared fixtures for the TweetVerse test suite.
"""

from datetime import datetime, timezone

import pytest

from tweetverse.models import Record


FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)

SAMPLE_CSV = (
    "date,time,tweet,translated_text,compound,sentiment\n"
    "01/01/2024,09:00,orig one,great day great mood,0.8,Positive\n"
    "02/01/2024,09:00,orig two,bad day,-0.6,Negative\n"
)


@pytest.fixture
def fixed_clock():
    """Deterministic 'now' for range fallbacks."""
    return lambda: FIXED_NOW


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV.encode("utf-8")


def _make_record(
    day: int,
    hour: int = 9,
    sentiment: str = "positive",
    text: str = "sample text",
    score: float = 0.0,
    month: int = 1,
    with_timestamp: bool = True,
) -> Record:
    """Build a record dated in 2024 without going through the parser."""
    timestamp = datetime(2024, month, day, hour, tzinfo=timezone.utc) if with_timestamp else None
    return Record(
        date=f"{day:02d}/{month:02d}/2024",
        time=f"{hour:02d}:00",
        translated_text=text,
        sentiment=sentiment,
        score=score,
        timestamp=timestamp,
    )


@pytest.fixture
def make_record():
    """Factory fixture for hand-built records."""
    return _make_record
