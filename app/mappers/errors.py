"""
app/mappers/errors.py

Row-local parse failures. None of these are fatal to an upload: the CSV
reader turns them into placeholder candidates.
"""

from __future__ import annotations


class RowParseError(ValueError):
    """Base exception for a CSV row that cannot be turned into a deal."""


class RowShapeError(RowParseError):
    """Raised when a row has fewer cells than the deal layout requires."""


class TimestampFormatError(RowParseError):
    """Raised when a timestamp is empty or matches none of the accepted formats."""


class AmountFormatError(RowParseError):
    """Raised when an amount is empty or not an exact decimal number."""
