"""
app/mappers/row_parser.py

Maps one raw CSV row onto a DealRecord.

Column layout (exchange rate is not part of the CSV schema):

    deal_id, currency_from, currency_to, deal_timestamp, deal_amount
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from app.domain.fx_deal import DealRecord
from app.mappers.errors import AmountFormatError, RowShapeError, TimestampFormatError
from app.mappers.timestamp_parser import parse_timestamp

MIN_ROW_CELLS = 5


def parse_deal_row(row: Sequence[str], row_number: int) -> DealRecord:
    """
    Parse one CSV row.

    Raises a RowParseError subclass naming ``row_number`` on the first
    malformed cell.
    """

    if len(row) < MIN_ROW_CELLS:
        raise RowShapeError(
            f"Row must contain at least {MIN_ROW_CELLS} columns. Found: {len(row)}"
        )

    deal_id = row[0].strip()
    currency_from = row[1].strip().upper()
    currency_to = row[2].strip().upper()

    try:
        deal_timestamp = parse_timestamp(row[3])
    except TimestampFormatError as exc:
        if not row[3].strip():
            raise TimestampFormatError(f"Timestamp is empty at row {row_number}") from exc
        raise TimestampFormatError(
            f"Invalid timestamp format at row {row_number}: {row[3]}"
        ) from exc

    deal_amount = parse_amount(row[4], row_number)

    return DealRecord(
        deal_id=deal_id,
        currency_from=currency_from,
        currency_to=currency_to,
        deal_timestamp=deal_timestamp,
        deal_amount=deal_amount,
    )


def parse_amount(value: str | None, row_number: int) -> Decimal:
    """
    Parse an exact decimal amount, keeping the scale as written.
    """

    if value is None or not value.strip():
        raise AmountFormatError(f"Amount is empty at row {row_number}")

    raw = value.strip()
    if "_" in raw:
        raise AmountFormatError(f"Invalid amount format at row {row_number}: {value}")
    try:
        amount = Decimal(raw)
    except InvalidOperation as exc:
        raise AmountFormatError(f"Invalid amount format at row {row_number}: {value}") from exc

    if not amount.is_finite():
        raise AmountFormatError(f"Invalid amount format at row {row_number}: {value}")
    return amount
