"""
app/mappers/timestamp_parser.py

Tolerant parsing of deal timestamps.

Formats are tried in order and the first match wins, so the order of
TIMESTAMP_FORMATS is part of the contract. All results are naive local
date-times.
"""

from __future__ import annotations

import re
from datetime import datetime

from app.mappers.errors import TimestampFormatError

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
)

# strptime accepts unpadded fields; every field here is fixed width.
_FORMAT_SHAPES: dict[str, re.Pattern[str]] = {
    "%Y-%m-%dT%H:%M:%S": re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$"),
    "%Y-%m-%d %H:%M:%S": re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"),
    "%Y/%m/%d %H:%M:%S": re.compile(r"^\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}$"),
}

# ISO local date-time: seconds and fraction optional, no offset.
_ISO_LOCAL_DATE_TIME = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})T(?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,9}))?)?$"
)


def parse_timestamp(value: str | None) -> datetime:
    """
    Parse a free-form timestamp string into a naive datetime.

    Raises TimestampFormatError when the value is blank or no format matches.
    """

    if value is None or not value.strip():
        raise TimestampFormatError("Timestamp is empty.")

    raw = value.strip()
    for fmt in TIMESTAMP_FORMATS:
        if not _FORMAT_SHAPES[fmt].match(raw):
            continue
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue

    parsed = _parse_iso_local_date_time(raw)
    if parsed is not None:
        return parsed

    raise TimestampFormatError(f"Invalid timestamp format: {raw}")


def _parse_iso_local_date_time(raw: str) -> datetime | None:
    match = _ISO_LOCAL_DATE_TIME.match(raw)
    if match is None:
        return None

    # datetime carries microseconds only; nanosecond digits are truncated.
    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    try:
        day = datetime.strptime(match.group("date"), "%Y-%m-%d")
        return day.replace(
            hour=int(match.group("hour")),
            minute=int(match.group("minute")),
            second=int(match.group("second") or 0),
            microsecond=int(fraction),
        )
    except ValueError:
        return None
