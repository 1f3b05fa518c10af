"""
Sentiment aggregation over a RecordSet.

Labels and scores come with the uploaded data; this module only counts and
averages them for the chart and summary views.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date, timezone
from typing import Dict, List, Sequence

from tweetverse.config import SUMMARY_TOP_WORDS
from tweetverse.core.words import tokenize
from tweetverse.errors import InvalidInputError
from tweetverse.models import (
    SENTIMENT_LABELS,
    Record,
    SentimentTimeSeriesPoint,
    SummaryStats,
)

UNKNOWN_LABEL = "unknown"


def distribution(records: Sequence[Record]) -> Dict[str, int]:
    """
    Count records per sentiment label.

    Args:
        records: Records to count

    Returns:
        Mapping with positive, neutral and negative keys always present;
        unclassified labels are ignored
    """
    if records is None:
        raise InvalidInputError("records")

    counts = {label: 0 for label in SENTIMENT_LABELS}
    for record in records:
        label = record.label
        if label is not None:
            counts[label] += 1
    return counts


def time_series(records: Sequence[Record]) -> List[SentimentTimeSeriesPoint]:
    """
    Count sentiment labels per UTC calendar day.

    Records without a timestamp are skipped. Returns one point per distinct
    day, ordered ascending.
    """
    if records is None:
        raise InvalidInputError("records")

    by_day: Dict[str, List[Record]] = defaultdict(list)

    for record in records:
        if record.timestamp is None:
            continue
        day_key = record.timestamp.astimezone(timezone.utc).date().isoformat()
        by_day[day_key].append(record)

    points = []
    for day_key in sorted(by_day):
        counts = distribution(by_day[day_key])
        points.append(
            SentimentTimeSeriesPoint(
                day=date.fromisoformat(day_key),
                positive_count=counts["positive"],
                neutral_count=counts["neutral"],
                negative_count=counts["negative"],
            )
        )
    return points


def summary(records: Sequence[Record]) -> SummaryStats:
    """
    Build summary statistics for a record set.

    Every record counts toward the total and the mean score, whether or not it
    has a timestamp.
    """
    if records is None:
        raise InvalidInputError("records")

    total = len(records)
    average = sum(r.score or 0.0 for r in records) / total if total else 0.0
    texts = [r.translated_text for r in records if r.translated_text]

    return SummaryStats(
        total_count=total,
        average_sentiment_score=average,
        sentiment_counts=distribution(records),
        top_words=tokenize(texts, limit=SUMMARY_TOP_WORDS),
    )


def group_by_sentiment(records: Sequence[Record]) -> Dict[str, List[Record]]:
    """Group records by lower-cased label; empty labels go under 'unknown'."""
    if records is None:
        raise InvalidInputError("records")
    groups: Dict[str, List[Record]] = {}
    for record in records:
        key = (record.sentiment or "").strip().lower() or UNKNOWN_LABEL
        groups.setdefault(key, []).append(record)
    return groups
