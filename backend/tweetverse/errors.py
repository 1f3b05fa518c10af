"""
Error types raised by the transformation layer.

All of them carry a message that can be shown to the user as-is.
"""
from __future__ import annotations

from typing import Iterable, List


class TweetVerseError(ValueError):
    """Base class for upload and input validation failures."""


class InvalidFileTypeError(TweetVerseError):
    def __init__(self, filename: str | None = None):
        self.filename = filename
        super().__init__("Please upload a CSV file.")


class ParseError(TweetVerseError):
    def __init__(self, message: str = "Failed to parse CSV file. Please check the format."):
        super().__init__(message)


class MissingColumnsError(ParseError):
    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        super().__init__(f"Missing required columns: {', '.join(self.missing)}")


class EmptyOrMalformedError(ParseError):
    def __init__(self, message: str = "The CSV file is empty or has invalid format."):
        super().__init__(message)


class InvalidInputError(TweetVerseError):
    def __init__(self, argument: str = "input"):
        self.argument = argument
        super().__init__(f"Expected a sequence for '{argument}', got None")


__all__ = [
    "TweetVerseError",
    "InvalidFileTypeError",
    "ParseError",
    "MissingColumnsError",
    "EmptyOrMalformedError",
    "InvalidInputError",
]
