"""
Date-range computation and filtering over a RecordSet.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence

from tweetverse.config import DEFAULT_RANGE_DAYS
from tweetverse.errors import InvalidInputError
from tweetverse.models import DateRange, Record, RecordSet
from tweetverse.utils import now_utc

Clock = Callable[[], datetime]


def compute_range(records: Sequence[Record], now: Optional[Clock] = None) -> DateRange:
    """
    Get the tight timestamp bounds of a record set.

    Args:
        records: Records to scan
        now: Clock used for the fallback range (defaults to now_utc)

    Returns:
        DateRange from the earliest to the latest valid timestamp, or the last
        DEFAULT_RANGE_DAYS ending now when no record has a timestamp
    """
    if records is None:
        raise InvalidInputError("records")

    timestamps = [r.timestamp for r in records if r.timestamp is not None]

    if not timestamps:
        today = (now or now_utc)()
        return DateRange(start=today - timedelta(days=DEFAULT_RANGE_DAYS), end=today)

    return DateRange(start=min(timestamps), end=max(timestamps))


def filter_by_range(records: Sequence[Record], date_range: DateRange) -> RecordSet:
    """
    Keep records whose timestamp lies inside the inclusive range.

    Records without a timestamp are excluded. An inverted range yields an
    empty result.
    """
    if records is None:
        raise InvalidInputError("records")
    if date_range.is_inverted:
        return ()

    return tuple(
        r for r in records
        if r.timestamp is not None and date_range.start <= r.timestamp <= date_range.end
    )


def adjust_range(
    records: Sequence[Record],
    current: Optional[DateRange],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    now: Optional[Clock] = None,
) -> DateRange:
    """
    Apply a user's bound selection to the current range.

    A start chosen after the current end pulls the end forward to match, and an
    end chosen before the current start pulls the start back. A bound with no
    current counterpart is seeded from the dataset's overall bounds.
    """
    bounds = compute_range(records, now=now)
    current_start = current.start if current else None
    current_end = current.end if current else None

    if start is not None and end is not None:
        # Both chosen at once: the later selection (end) wins on conflict
        return DateRange(start=min(start, end), end=end)

    if start is not None:
        if current_end is None:
            return DateRange(start=start, end=bounds.end)
        return DateRange(start=start, end=max(start, current_end))

    if end is not None:
        if current_start is None:
            return DateRange(start=bounds.start, end=end)
        return DateRange(start=min(end, current_start), end=end)

    return current or bounds
