"""
Word frequency counting for the word cloud and summary views.
"""
from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional

import regex
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from tweetverse.config import HOT_TOPIC_LIMIT, MIN_TOKEN_LENGTH, WORD_CLOUD_LIMIT
from tweetverse.errors import InvalidInputError
from tweetverse.models import WordFrequencyEntry

# \w here covers letters, marks and digits of any script
_PUNCTUATION = regex.compile(r"[^\w\s]")

# Filler words ignored by the hot-topics view
COMMON_WORDS = frozenset(
    ["the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "is", "are", "was", "were"]
)


def _rank(tokens: Iterable[str], limit: Optional[int]) -> List[WordFrequencyEntry]:
    # Counter keeps first-seen order and sorted() is stable, so ties stay in encounter order
    counts = Counter(tokens)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ranked = ranked[:max(0, limit)]
    return [WordFrequencyEntry(text=word, count=count) for word, count in ranked]


def tokenize(texts: Optional[Iterable[str]], limit: Optional[int] = WORD_CLOUD_LIMIT) -> List[WordFrequencyEntry]:
    """
    Count word frequency across a corpus of texts.

    Texts are joined, lower-cased and stripped of punctuation; English
    stopwords and tokens shorter than MIN_TOKEN_LENGTH are removed.

    Args:
        texts: Sequence of free-form strings
        limit: Number of top entries to keep (None keeps all)

    Returns:
        Entries sorted by descending count, ties in first-occurrence order

    Raises:
        InvalidInputError: If texts is None
    """
    if texts is None:
        raise InvalidInputError("texts")

    corpus = " ".join(t for t in texts if t).lower()
    corpus = _PUNCTUATION.sub("", corpus)

    tokens = (
        token for token in corpus.split()
        if token not in ENGLISH_STOP_WORDS and len(token) >= MIN_TOKEN_LENGTH
    )
    return _rank(tokens, limit)


def hot_topics(texts: Optional[Iterable[str]], limit: int = HOT_TOPIC_LIMIT) -> List[WordFrequencyEntry]:
    """Most frequent longer words (more than 3 characters), punctuation kept."""
    if texts is None:
        raise InvalidInputError("texts")

    corpus = " ".join(t.lower() for t in texts if t)
    tokens = (
        token for token in corpus.split()
        if len(token) > 3 and token not in COMMON_WORDS
    )
    return _rank(tokens, limit)
