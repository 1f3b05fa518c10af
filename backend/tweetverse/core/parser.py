"""
CSV record parser.

Turns an uploaded CSV (header row + one post per line) into an immutable,
validated RecordSet. Validation happens once here so downstream aggregators
never deal with missing fields.
"""
from __future__ import annotations

import io
import logging
import math
from datetime import datetime, timezone
from typing import Any, BinaryIO, Dict, List, Optional, TextIO, Tuple, Union

import pandas as pd
from dateutil import parser as dateparser

from tweetverse.config import ALLOWED_EXTENSIONS, COLUMN_ALIASES, REQUIRED_COLUMNS
from tweetverse.errors import (
    EmptyOrMalformedError,
    InvalidFileTypeError,
    MissingColumnsError,
    ParseError,
)
from tweetverse.models import ParseResult, Record, RecordSet

logger = logging.getLogger(__name__)

CsvSource = Union[bytes, str, BinaryIO, TextIO]


def ensure_csv_filename(filename: Optional[str]) -> None:
    """
    Reject uploads whose name does not carry a CSV extension.

    Raises:
        InvalidFileTypeError: If the filename is missing or not *.csv
    """
    if not filename or not filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise InvalidFileTypeError(filename)


def build_timestamp(date_value: str, time_value: str) -> Optional[datetime]:
    """
    Combine a DD/MM/YYYY date and an HH:MM[:SS] time into a UTC datetime.

    Day and month may arrive without zero-padding. Returns None when the pair
    does not form a valid point in time.
    """
    parts = (date_value or "").strip().split("/")
    if len(parts) != 3 or not all(p.strip() for p in parts):
        return None

    day, month, year = (p.strip() for p in parts)
    iso = f"{year}-{month.zfill(2)}-{day.zfill(2)}T{(time_value or '').strip()}"
    try:
        parsed = dateparser.isoparse(iso)
    except (ValueError, OverflowError):
        return None

    if parsed.tzinfo:
        return parsed.astimezone(timezone.utc)
    return parsed.replace(tzinfo=timezone.utc)


def coerce_score(value: Any) -> float:
    """Parse the compound column; anything non-numeric becomes 0.0."""
    if value is None:
        return 0.0
    try:
        score = float(str(value).strip())
    except ValueError:
        return 0.0
    return score if math.isfinite(score) else 0.0


def _read_frame(source: CsvSource) -> Tuple[pd.DataFrame, int]:
    """Read the CSV as strings; returns the frame and the number of skipped lines."""
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    elif isinstance(source, str):
        source = io.StringIO(source)

    skipped: List[List[str]] = []

    def _skip_line(fields: List[str]) -> None:
        skipped.append(fields)

    try:
        # index_col=False keeps fields mapped by header name when rows end
        # with a trailing delimiter; extra fields beyond the header are ignored
        frame = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            engine="python",
            on_bad_lines=_skip_line,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError as e:
        raise EmptyOrMalformedError() from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ParseError() from e

    return frame.fillna(""), len(skipped)


def _resolve_columns(columns: List[str]) -> Dict[str, str]:
    """Map each required column to the header name that provides it."""
    available = set(columns)
    resolved: Dict[str, str] = {}
    missing: List[str] = []

    for name in REQUIRED_COLUMNS:
        candidates = (name, *COLUMN_ALIASES.get(name, ()))
        match = next((c for c in candidates if c in available), None)
        if match is None:
            missing.append(name)
        else:
            resolved[name] = match

    if missing:
        raise MissingColumnsError(missing)
    return resolved


def _row_to_record(row: Dict[str, str], columns: Dict[str, str]) -> Optional[Record]:
    date_value = (row.get(columns["date"]) or "").strip()
    time_value = (row.get(columns["time"]) or "").strip()
    translated = row.get(columns["translated_text"]) or ""

    if not date_value or not time_value or not translated.strip():
        return None

    return Record(
        date=date_value,
        time=time_value,
        translated_text=translated,
        sentiment=(row.get(columns["sentiment"]) or "").strip(),
        score=coerce_score(row.get(columns["compound"])),
        text=row.get("tweet") or "",
        timestamp=build_timestamp(date_value, time_value),
    )


def parse_upload(source: CsvSource) -> ParseResult:
    """
    Parse an uploaded CSV into records, reporting how many rows were dropped.

    Rows missing date, time or translated text (blank counts as missing) are
    dropped without individual reporting, as are lines the CSV reader cannot
    split into fields; both are included in ``rows_dropped``. Rows with more
    fields than the header keep the header columns and ignore the rest.
    Rows whose date/time do not form a valid timestamp are kept with
    ``timestamp=None``.

    Args:
        source: CSV content as bytes, text, or a readable file object

    Returns:
        ParseResult with the RecordSet in file order

    Raises:
        ParseError: Structure could not be read (MissingColumnsError and
            EmptyOrMalformedError are subclasses)
    """
    frame, skipped = _read_frame(source)
    if frame.empty:
        raise EmptyOrMalformedError()

    columns = _resolve_columns([str(c) for c in frame.columns])

    rows = frame.to_dict(orient="records")
    records: RecordSet = tuple(
        record for record in (_row_to_record(row, columns) for row in rows) if record is not None
    )
    rows_read = len(rows) + skipped
    dropped = rows_read - len(records)

    if not records:
        raise EmptyOrMalformedError()

    without_timestamp = sum(1 for r in records if r.timestamp is None)
    logger.info(
        "Parsed %d rows: %d kept, %d dropped, %d without a valid timestamp",
        rows_read, len(records), dropped, without_timestamp,
    )
    return ParseResult(records=records, rows_read=rows_read, rows_dropped=dropped)


def parse_records(source: CsvSource) -> RecordSet:
    """Parse an uploaded CSV and return only the RecordSet."""
    return parse_upload(source).records
