"""
app/services/csv_deal_reader.py

Turns an uploaded CSV file into an ordered list of candidate deals.

File-level problems (empty upload, unsupported content type, undecodable
bytes, broken CSV framing) abort the whole upload. A bad row never does:
it becomes a placeholder candidate that fails validation downstream, so
the row still shows up in the import summary.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass

from app.domain.fx_deal import DealRecord, RowCandidate
from app.mappers.errors import RowParseError
from app.mappers.row_parser import parse_deal_row

logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "text/csv",
        "application/vnd.ms-excel",
        "text/plain",
    }
)


class InvalidFileError(ValueError):
    """
    Raised when an upload is rejected before any row is read.
    """


class CSVStructureError(InvalidFileError):
    """
    Raised when the CSV framing itself cannot be read.
    """


@dataclass(frozen=True)
class CSVUpload:
    """
    Raw upload as received from the caller.
    """

    content: bytes
    content_type: str | None
    filename: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.content


class CSVDealReader:
    """
    Parses uploads into RowCandidate objects, one per non-blank data row.
    """

    def __init__(
        self,
        *,
        encoding: str = "utf-8-sig",
        accepted_content_types: Collection[str] = ACCEPTED_CONTENT_TYPES,
    ) -> None:
        self._encoding = encoding
        self._accepted_content_types = frozenset(ct.lower() for ct in accepted_content_types)

    def read(self, upload: CSVUpload) -> list[RowCandidate]:
        """
        Validate the upload and parse every data row.

        The first row is always treated as a header. Row numbers are
        1-based over data records and count skipped blank rows, so they give
        the record position in the upload. A quoted cell spanning lines is
        one record, so row numbers can differ from physical line numbers.
        """

        self._check_upload(upload)
        rows = self._read_rows(upload.content)
        if not rows:
            logger.warning("CSV file is empty filename=%r", upload.filename)
            return []

        candidates: list[RowCandidate] = []
        for row_number, row in enumerate(rows[1:], start=1):
            if self.is_blank_row(row):
                logger.debug("Skipping empty row row=%s", row_number)
                continue

            try:
                record = parse_deal_row(row, row_number)
            except RowParseError as exc:
                logger.warning("Error parsing row=%s: %s", row_number, exc)
                candidates.append(
                    RowCandidate(
                        row_number=row_number,
                        record=self._placeholder(row, row_number),
                        parse_error=str(exc),
                    )
                )
                continue

            candidates.append(RowCandidate(row_number=row_number, record=record))

        logger.info(
            "Parsed %d deal candidate(s) from CSV filename=%r",
            len(candidates),
            upload.filename,
        )
        return candidates

    def _check_upload(self, upload: CSVUpload) -> None:
        if upload.is_empty:
            raise InvalidFileError("file is invalid")

        content_type = (upload.content_type or "").strip().lower()
        if content_type not in self._accepted_content_types:
            raise InvalidFileError("Invalid file type. Expected CSV")

    def _read_rows(self, content: bytes) -> list[list[str]]:
        try:
            text = content.decode(self._encoding)
        except UnicodeDecodeError as exc:
            raise CSVStructureError(f"CSV must be {self._encoding} encoded.") from exc
        except LookupError as exc:
            raise CSVStructureError(f"Unsupported CSV encoding: {self._encoding}") from exc

        try:
            return list(csv.reader(io.StringIO(text, newline=""), strict=True))
        except csv.Error as exc:
            raise CSVStructureError(f"Failed to parse CSV file: {exc}") from exc

    @staticmethod
    def is_blank_row(row: Sequence[str]) -> bool:
        """
        Return True when every cell is empty or whitespace.
        """

        return all(not cell.strip() for cell in row)

    @staticmethod
    def _placeholder(row: Sequence[str], row_number: int) -> DealRecord:
        deal_id = row[0].strip() if row else ""
        return DealRecord(deal_id=deal_id or f"UNKNOWN_ROW_{row_number}")
