"""
File: tweetverse/models.py
Internal data structures produced by parsing and consumed by the aggregators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple


SENTIMENT_LABELS: Tuple[str, ...] = ("positive", "neutral", "negative")


@dataclass(frozen=True)
class Record:
    """One validated input row.

    ``timestamp`` is None when date/time could not be combined; such records
    still count toward totals but are left out of range and time-series logic.
    """

    date: str  # DD/MM/YYYY as uploaded
    time: str  # HH:MM[:SS]
    translated_text: str
    sentiment: str = ""  # raw label, compared case-insensitively
    score: float = 0.0  # "compound" column, 0.0 when missing/unparseable
    text: str = ""  # raw "tweet" column, informational only
    timestamp: Optional[datetime] = None

    @property
    def label(self) -> Optional[str]:
        """Normalized sentiment label, or None when unclassified."""
        normalized = (self.sentiment or "").strip().lower()
        return normalized if normalized in SENTIMENT_LABELS else None


# Ordered, immutable collection of records
RecordSet = Tuple[Record, ...]


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] bound used to filter records."""

    start: datetime
    end: datetime

    @property
    def is_inverted(self) -> bool:
        return self.start > self.end


@dataclass(frozen=True)
class WordFrequencyEntry:
    text: str
    count: int


@dataclass(frozen=True)
class SentimentTimeSeriesPoint:
    day: date
    positive_count: int = 0
    neutral_count: int = 0
    negative_count: int = 0


@dataclass(frozen=True)
class SummaryStats:
    total_count: int
    average_sentiment_score: float
    sentiment_counts: Dict[str, int]
    top_words: List[WordFrequencyEntry] = field(default_factory=list)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a successful upload parse."""

    records: RecordSet
    rows_read: int
    rows_dropped: int = 0


__all__ = [
    "SENTIMENT_LABELS",
    "Record",
    "RecordSet",
    "DateRange",
    "WordFrequencyEntry",
    "SentimentTimeSeriesPoint",
    "SummaryStats",
    "ParseResult",
]
