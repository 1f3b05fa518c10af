"""
In-memory holder for the session's canonical dataset.

One RecordSet at a time: a completed upload replaces it wholesale along with
any range derived from it. Filtered views are always recomputed from the full
set.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from tweetverse.core.date_range import Clock, adjust_range, compute_range, filter_by_range
from tweetverse.models import DateRange, ParseResult, RecordSet
from tweetverse.utils import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dataset:
    filename: str
    records: RecordSet
    rows_dropped: int
    date_range: DateRange
    uploaded_at: datetime


class DatasetStore:
    """Tracks the current dataset and the date range selected over it."""

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock
        self._dataset: Optional[Dataset] = None

    @property
    def dataset(self) -> Optional[Dataset]:
        return self._dataset

    @property
    def loaded(self) -> bool:
        return self._dataset is not None

    def _now(self) -> datetime:
        return (self._clock or now_utc)()

    def install(self, filename: str, result: ParseResult) -> Dataset:
        """Install a freshly parsed upload; the last completed upload wins."""
        dataset = Dataset(
            filename=filename,
            records=result.records,
            rows_dropped=result.rows_dropped,
            date_range=compute_range(result.records, now=self._clock),
            uploaded_at=self._now(),
        )
        if self._dataset is not None:
            logger.info("Replacing dataset %s with %s", self._dataset.filename, filename)
        self._dataset = dataset
        return dataset

    def clear(self) -> None:
        self._dataset = None

    def bounds(self) -> Optional[DateRange]:
        """Overall timestamp bounds of the full dataset."""
        if self._dataset is None:
            return None
        return compute_range(self._dataset.records, now=self._clock)

    def select_range(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Optional[DateRange]:
        """Apply a start/end selection and remember the adjusted range."""
        if self._dataset is None:
            return None
        new_range = adjust_range(
            self._dataset.records, self._dataset.date_range, start=start, end=end, now=self._clock
        )
        self._dataset = replace(self._dataset, date_range=new_range)
        return new_range

    def filtered(self) -> RecordSet:
        """Records inside the current range; empty when nothing is loaded."""
        if self._dataset is None:
            return ()
        return filter_by_range(self._dataset.records, self._dataset.date_range)
