from __future__ import annotations

from datetime import datetime

import pytest

from app.mappers.errors import TimestampFormatError
from app.mappers.timestamp_parser import parse_timestamp


@pytest.mark.parametrize(
    "raw",
    [
        "2024-01-15T10:30:00",
        "2024-01-15 10:30:00",
        "2024/01/15 10:30:00",
        "  2024-01-15 10:30:00  ",
    ],
)
def test_accepts_every_supported_layout(raw: str) -> None:
    assert parse_timestamp(raw) == datetime(2024, 1, 15, 10, 30, 0)


def test_iso_without_seconds() -> None:
    assert parse_timestamp("2024-01-15T10:30") == datetime(2024, 1, 15, 10, 30)


def test_iso_fraction_is_kept_to_microseconds() -> None:
    assert parse_timestamp("2024-01-15T10:30:00.123") == datetime(2024, 1, 15, 10, 30, 0, 123000)
    assert parse_timestamp("2024-01-15T10:30:00.123456789") == datetime(2024, 1, 15, 10, 30, 0, 123456)


def test_result_is_naive() -> None:
    assert parse_timestamp("2024-01-15T10:30:00").tzinfo is None


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_blank_value_is_rejected(raw: str | None) -> None:
    with pytest.raises(TimestampFormatError, match="Timestamp is empty"):
        parse_timestamp(raw)


@pytest.mark.parametrize(
    "raw",
    [
        "15/01/2024 10:30:00",
        "2024-01-15",
        "not-a-date",
        "2024-13-01T10:30:00",
        "2024-01-15T10:30:00Z",
        "2024-01-15T10:30:00+02:00",
        "2024-1-5 1:2:3",
        "2024/1/5 1:2:3",
        "2024-1-5T1:2:3",
        "2024-01-15 7:05:09",
        "2024/01/15 10:30:0",
    ],
)
def test_unsupported_values_are_rejected(raw: str) -> None:
    with pytest.raises(TimestampFormatError) as exc_info:
        parse_timestamp(raw)
    assert str(exc_info.value) == f"Invalid timestamp format: {raw}"
