"""
Unit tests for sentiment aggregation.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from tweetverse.core.parser import parse_records
from tweetverse.core.sentiment import distribution, group_by_sentiment, summary, time_series
from tweetverse.errors import InvalidInputError
from tweetverse.models import Record, WordFrequencyEntry


def test_distribution_zero_initialized():
    assert distribution([]) == {"positive": 0, "neutral": 0, "negative": 0}


def test_distribution_case_insensitive_and_skips_unclassified(make_record):
    records = [
        make_record(1, sentiment="Positive"),
        make_record(1, sentiment="NEUTRAL"),
        make_record(1, sentiment="negative"),
        make_record(1, sentiment="mixed"),
        make_record(1, sentiment=""),
    ]
    counts = distribution(records)

    assert counts == {"positive": 1, "neutral": 1, "negative": 1}
    assert sum(counts.values()) < len(records)


def test_time_series_groups_by_utc_day(make_record):
    records = [
        make_record(2, 8, sentiment="negative"),
        make_record(1, 9, sentiment="positive"),
        make_record(1, 23, sentiment="positive"),
        make_record(2, 10, sentiment="neutral"),
        make_record(3, with_timestamp=False),
    ]
    points = time_series(records)

    assert [p.day for p in points] == [date(2024, 1, 1), date(2024, 1, 2)]
    assert (points[0].positive_count, points[0].neutral_count, points[0].negative_count) == (2, 0, 0)
    assert (points[1].positive_count, points[1].neutral_count, points[1].negative_count) == (0, 1, 1)


def test_time_series_uses_utc_calendar_day():
    # 23:30 at UTC-05:00 is already the next day in UTC
    offset = timezone(timedelta(hours=-5))
    record = Record(
        date="01/01/2024",
        time="23:30",
        translated_text="late post",
        sentiment="positive",
        timestamp=datetime(2024, 1, 1, 23, 30, tzinfo=offset),
    )
    assert time_series([record])[0].day == date(2024, 1, 2)


def test_time_series_empty():
    assert time_series([]) == []


def test_summary_scenario(sample_csv):
    stats = summary(parse_records(sample_csv))

    assert stats.total_count == 2
    assert stats.average_sentiment_score == pytest.approx(0.1)
    assert stats.sentiment_counts == {"positive": 1, "neutral": 0, "negative": 1}
    assert stats.top_words[0] == WordFrequencyEntry(text="great", count=2)
    counts = [w.count for w in stats.top_words]
    assert counts == sorted(counts, reverse=True)


def test_summary_counts_records_without_timestamp(make_record):
    records = [make_record(1, score=1.0), make_record(2, score=0.0, with_timestamp=False)]
    stats = summary(records)

    assert stats.total_count == 2
    assert stats.average_sentiment_score == pytest.approx(0.5)


def test_summary_top_words_capped_at_ten(make_record):
    text = " ".join(f"term{i:02d}" for i in range(30))
    stats = summary([make_record(1, text=text)])
    assert len(stats.top_words) == 10


def test_summary_empty():
    stats = summary([])

    assert stats.total_count == 0
    assert stats.average_sentiment_score == 0.0
    assert stats.sentiment_counts == {"positive": 0, "neutral": 0, "negative": 0}
    assert stats.top_words == []


def test_summary_rejects_none():
    with pytest.raises(InvalidInputError):
        summary(None)


def test_group_by_sentiment(make_record):
    records = [
        make_record(1, sentiment="Positive", text="a"),
        make_record(2, sentiment="", text="b"),
        make_record(3, sentiment="positive", text="c"),
        make_record(4, sentiment="Mixed", text="d"),
    ]
    groups = group_by_sentiment(records)

    assert [r.translated_text for r in groups["positive"]] == ["a", "c"]
    assert [r.translated_text for r in groups["unknown"]] == ["b"]
    assert [r.translated_text for r in groups["mixed"]] == ["d"]


@pytest.mark.parametrize("aggregate", [distribution, time_series, group_by_sentiment])
def test_aggregates_reject_none(aggregate):
    with pytest.raises(InvalidInputError):
        aggregate(None)
