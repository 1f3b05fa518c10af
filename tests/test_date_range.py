"""
Unit tests for date-range computation, filtering and bound adjustment.
"""

from datetime import datetime, timedelta, timezone

import pytest

from tweetverse.core.date_range import adjust_range, compute_range, filter_by_range
from tweetverse.errors import InvalidInputError
from tweetverse.models import DateRange


def utc(day, hour=0, month=1):
    return datetime(2024, month, day, hour, tzinfo=timezone.utc)


def test_compute_range_is_tight(make_record):
    records = [make_record(3, 10), make_record(1, 8), make_record(5, 17)]
    assert compute_range(records) == DateRange(start=utc(1, 8), end=utc(5, 17))


def test_compute_range_ignores_missing_timestamps(make_record):
    records = [make_record(2), make_record(9, with_timestamp=False)]
    date_range = compute_range(records)
    assert date_range.start == date_range.end == utc(2, 9)


def test_empty_range_falls_back_to_last_week(fixed_clock):
    date_range = compute_range([], now=fixed_clock)

    assert date_range.end == fixed_clock()
    assert date_range.end - date_range.start == timedelta(days=7)


def test_filter_with_computed_range_keeps_all_timestamped(make_record):
    records = [
        make_record(1, 0),
        make_record(4, 12, with_timestamp=False),
        make_record(2, 23),
        make_record(6, 6),
    ]
    filtered = filter_by_range(records, compute_range(records))

    assert filtered == tuple(r for r in records if r.timestamp is not None)


def test_filter_is_inclusive(make_record):
    records = [make_record(1, 9), make_record(2, 9), make_record(3, 9)]
    filtered = filter_by_range(records, DateRange(start=utc(2, 9), end=utc(3, 9)))
    assert [r.timestamp.day for r in filtered] == [2, 3]


def test_inverted_range_yields_nothing(make_record):
    records = [make_record(1), make_record(2)]
    assert filter_by_range(records, DateRange(start=utc(3), end=utc(1))) == ()


def test_filter_does_not_touch_input(make_record):
    records = (make_record(1), make_record(5))
    filter_by_range(records, DateRange(start=utc(4), end=utc(6)))
    assert len(records) == 2


def test_start_after_end_moves_end(make_record):
    records = [make_record(1), make_record(10)]
    current = DateRange(start=utc(1), end=utc(5))

    adjusted = adjust_range(records, current, start=utc(7))

    assert adjusted == DateRange(start=utc(7), end=utc(7))


def test_end_before_start_moves_start(make_record):
    records = [make_record(1), make_record(10)]
    current = DateRange(start=utc(5), end=utc(9))

    adjusted = adjust_range(records, current, end=utc(3))

    assert adjusted == DateRange(start=utc(3), end=utc(3))


def test_compatible_bound_keeps_other_bound(make_record):
    records = [make_record(1), make_record(10)]
    current = DateRange(start=utc(2), end=utc(9))

    assert adjust_range(records, current, start=utc(4)) == DateRange(start=utc(4), end=utc(9))
    assert adjust_range(records, current, end=utc(6)) == DateRange(start=utc(2), end=utc(6))


def test_unset_bound_seeded_from_dataset(make_record):
    records = [make_record(1, 9), make_record(10, 9)]

    assert adjust_range(records, None, start=utc(4)) == DateRange(start=utc(4), end=utc(10, 9))
    assert adjust_range(records, None, end=utc(4)) == DateRange(start=utc(1, 9), end=utc(4))


def test_no_selection_keeps_current(make_record):
    records = [make_record(1), make_record(10)]
    current = DateRange(start=utc(2), end=utc(3))

    assert adjust_range(records, current) == current
    assert adjust_range(records, None) == compute_range(records)


def test_none_records_rejected():
    with pytest.raises(InvalidInputError):
        compute_range(None)
    with pytest.raises(InvalidInputError):
        filter_by_range(None, DateRange(start=utc(1), end=utc(2)))
    with pytest.raises(InvalidInputError):
        adjust_range(None, None, start=utc(1))


def test_inverted_range_flag():
    assert DateRange(start=utc(3), end=utc(1)).is_inverted
    assert not DateRange(start=utc(1), end=utc(1)).is_inverted
