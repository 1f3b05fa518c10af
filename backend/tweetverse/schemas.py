# tweetverse/schemas.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from tweetverse.models import (
    DateRange,
    Record,
    SentimentTimeSeriesPoint,
    SummaryStats,
    WordFrequencyEntry,
)


class RecordOut(BaseModel):
    date: str
    time: str
    tweet: str = ""
    translated_text: str
    compound: float
    sentiment: str = ""
    timestamp: Optional[datetime] = None          # None when date/time were unusable

    @classmethod
    def from_record(cls, record: Record) -> "RecordOut":
        return cls(
            date=record.date,
            time=record.time,
            tweet=record.text,
            translated_text=record.translated_text,
            compound=record.score,
            sentiment=record.sentiment,
            timestamp=record.timestamp,
        )


class DateRangeOut(BaseModel):
    start: datetime
    end: datetime

    @classmethod
    def from_range(cls, date_range: DateRange) -> "DateRangeOut":
        return cls(start=date_range.start, end=date_range.end)


class DateRangeIn(BaseModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @field_validator("start", "end")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Record timestamps are UTC-aware; naive input is read as UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class WordOut(BaseModel):
    text: str
    count: int

    @classmethod
    def from_entry(cls, entry: WordFrequencyEntry) -> "WordOut":
        return cls(text=entry.text, count=entry.count)


class TimeSeriesPointOut(BaseModel):
    day: date
    positive: int
    neutral: int
    negative: int

    @classmethod
    def from_point(cls, point: SentimentTimeSeriesPoint) -> "TimeSeriesPointOut":
        return cls(
            day=point.day,
            positive=point.positive_count,
            neutral=point.neutral_count,
            negative=point.negative_count,
        )


class SummaryOut(BaseModel):
    total_count: int
    average_sentiment_score: float
    sentiment_counts: Dict[str, int]
    top_words: List[WordOut] = Field(default_factory=list)

    @classmethod
    def from_stats(cls, stats: SummaryStats) -> "SummaryOut":
        return cls(
            total_count=stats.total_count,
            average_sentiment_score=stats.average_sentiment_score,
            sentiment_counts=dict(stats.sentiment_counts),
            top_words=[WordOut.from_entry(w) for w in stats.top_words],
        )


class UploadResponse(BaseModel):
    filename: str
    total: int
    rows_dropped: int
    date_range: DateRangeOut
    uploaded_at: str


class RangeResponse(BaseModel):
    date_range: DateRangeOut
    bounds: DateRangeOut
    total: int
    shown: int


class RecordsResponse(BaseModel):
    total: int
    shown: int
    records: List[RecordOut]


class SummaryDetailResponse(BaseModel):
    summary: SummaryOut
    date_range: DateRangeOut
    hot_topics: List[WordOut]
    groups: Dict[str, List[RecordOut]]
