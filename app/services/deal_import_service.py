"""
app/services/deal_import_service.py

Batch orchestration for FX deal imports.

Every candidate goes through the same two steps, in input order:

    1. FxDealValidator.validate()   -> VALIDATION failure on a broken rule
    2. DealStore.insert()           -> DUPLICATE failure on a known deal_id,
                                       UNKNOWN failure on anything else

Each candidate ends in exactly one outcome. Failures are counted, written
to the error sink before the next candidate starts, and never stop the
batch. Only file-level errors from the CSV reader reach the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import lru_cache
from typing import Any, Protocol

from app.config import get_deal_import_settings
from app.domain.fx_deal import DealRecord, ImportOutcome, ImportSummary, RowCandidate
from app.repositories.errors import DuplicateDealError
from app.services.csv_deal_reader import CSVDealReader, CSVUpload
from app.validators.fx_deal_validator import DealValidationError, FxDealValidator

logger = logging.getLogger(__name__)


class DealStore(Protocol):
    def exists(self, deal_id: str) -> bool:
        ...

    def insert(self, record: DealRecord) -> Any:
        ...

    def get(self, deal_id: str) -> Any:
        ...

    def list_all(self) -> Sequence[Any]:
        ...


class ErrorSink(Protocol):
    def record(
        self,
        *,
        row_number: int | None,
        deal_id: str | None,
        message: str,
        error_type: str,
    ) -> None:
        ...


class DealImportService:
    """
    Coordinates validation, duplicate-safe persistence and error auditing.
    """

    def __init__(
        self,
        *,
        validator: FxDealValidator | None = None,
        csv_reader: CSVDealReader | None = None,
        log_import_errors: bool = True,
        unknown_error_message: str = "internal error",
    ) -> None:
        self._validator = validator or FxDealValidator()
        self._csv_reader = csv_reader or CSVDealReader()
        self._log_import_errors = log_import_errors
        self._unknown_error_message = unknown_error_message

    def import_deal(
        self,
        *,
        record: DealRecord,
        store: DealStore,
        error_sink: ErrorSink,
    ) -> ImportSummary:
        """
        Import one deal as a batch of one, attributed to row 1.
        """

        return self.import_deals(
            candidates=[RowCandidate(row_number=1, record=record)],
            store=store,
            error_sink=error_sink,
        )

    def import_csv(
        self,
        *,
        upload: CSVUpload,
        store: DealStore,
        error_sink: ErrorSink,
    ) -> ImportSummary:
        """
        Parse an uploaded CSV file and import its rows.

        Raises InvalidFileError (or CSVStructureError) before any row is
        imported when the upload itself is unusable.
        """

        candidates = self._csv_reader.read(upload)
        return self.import_deals(candidates=candidates, store=store, error_sink=error_sink)

    def import_deals(
        self,
        *,
        candidates: Sequence[RowCandidate],
        store: DealStore,
        error_sink: ErrorSink,
    ) -> ImportSummary:
        outcomes: list[ImportOutcome] = []

        for candidate in candidates:
            outcome = self._process(candidate, store)
            if not outcome.is_success:
                self._record_failure(outcome, error_sink)
            outcomes.append(outcome)

        summary = ImportSummary.from_outcomes(outcomes)
        logger.info(
            "Deal import finished total=%d success=%d failed=%d duplicate=%d",
            summary.total_records,
            summary.successful_imports,
            summary.failed_imports,
            summary.duplicate_imports,
        )
        return summary

    def _process(self, candidate: RowCandidate, store: DealStore) -> ImportOutcome:
        record = candidate.record
        row_number = candidate.row_number

        try:
            self._validator.validate(record)
        except DealValidationError as exc:
            # A placeholder fails on whatever field is missing first; the
            # parse error is the useful diagnosis.
            return ImportOutcome.validation_failure(
                row_number=row_number,
                deal_id=record.deal_id,
                reason=candidate.parse_error or exc.message,
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected validation failure row=%s deal_id=%r", row_number, record.deal_id)
            return self._unknown(candidate, exc)

        try:
            store.insert(record)
        except DuplicateDealError as exc:
            return ImportOutcome.duplicate_failure(
                row_number=row_number,
                deal_id=record.deal_id,
                reason=str(exc),
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected persistence failure row=%s deal_id=%r", row_number, record.deal_id)
            return self._unknown(candidate, exc)

        logger.debug("Imported FX deal row=%s deal_id=%r", row_number, record.deal_id)
        return ImportOutcome.success(row_number=row_number, deal_id=record.deal_id)

    def _unknown(self, candidate: RowCandidate, exc: Exception) -> ImportOutcome:
        return ImportOutcome.unknown_failure(
            row_number=candidate.row_number,
            deal_id=candidate.record.deal_id,
            public_message=self._unknown_error_message,
            reason=str(exc) or exc.__class__.__name__,
        )

    def _record_failure(self, outcome: ImportOutcome, error_sink: ErrorSink) -> None:
        if self._log_import_errors:
            logger.warning(
                "Deal import error row=%s deal_id=%r type=%s message=%s",
                outcome.row_number,
                outcome.deal_id,
                outcome.error_type,
                outcome.detail,
            )

        # Sink failures are logged here and never reach the caller.
        try:
            error_sink.record(
                row_number=outcome.row_number,
                deal_id=outcome.deal_id,
                message=outcome.detail or "",
                error_type=outcome.error_type or "",
            )
        except Exception:  # noqa: BLE001
            logger.exception(
                "Error sink failed row=%s deal_id=%r type=%s",
                outcome.row_number,
                outcome.deal_id,
                outcome.error_type,
            )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_deal_import_service() -> DealImportService:
    """
    Build and cache the import service with env-driven settings.
    """
    settings = get_deal_import_settings()
    return DealImportService(
        validator=FxDealValidator(max_future_skew=settings.max_future_skew),
        csv_reader=CSVDealReader(encoding=settings.csv_encoding),
        log_import_errors=settings.log_import_errors,
        unknown_error_message=settings.unknown_error_message,
    )
