"""
app/mappers package marker.
"""

from app.mappers.errors import AmountFormatError, RowParseError, RowShapeError, TimestampFormatError
from app.mappers.row_parser import MIN_ROW_CELLS, parse_amount, parse_deal_row
from app.mappers.timestamp_parser import TIMESTAMP_FORMATS, parse_timestamp

__all__ = [
    "AmountFormatError",
    "MIN_ROW_CELLS",
    "RowParseError",
    "RowShapeError",
    "TIMESTAMP_FORMATS",
    "TimestampFormatError",
    "parse_amount",
    "parse_deal_row",
    "parse_timestamp",
]
