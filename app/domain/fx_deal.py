"""
app/domain/fx_deal.py

Domain models used by the FX deal import pipeline.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from db.models.import_error import ImportErrorType


@dataclass(frozen=True)
class DealRecord:
    """
    Candidate deal before validation and persistence.

    Every field except ``deal_id`` may be missing: placeholder candidates
    built from unparseable CSV rows carry the deal id only.
    """

    deal_id: str | None
    currency_from: str | None = None
    currency_to: str | None = None
    deal_timestamp: datetime | None = None
    deal_amount: Decimal | None = None
    exchange_rate: float | None = None


@dataclass(frozen=True)
class RowCandidate:
    """
    A candidate deal plus the row it came from.

    ``parse_error`` is set when the row could not be parsed and ``record``
    is a deliberately invalid placeholder.
    """

    row_number: int
    record: DealRecord
    parse_error: str | None = None


class ImportOutcomeStatus:
    SUCCESS = "success"
    VALIDATION_FAILURE = "validation_failure"
    DUPLICATE_FAILURE = "duplicate_failure"
    UNKNOWN_FAILURE = "unknown_failure"


_ERROR_TYPE_BY_STATUS: dict[str, str] = {
    ImportOutcomeStatus.VALIDATION_FAILURE: ImportErrorType.VALIDATION,
    ImportOutcomeStatus.DUPLICATE_FAILURE: ImportErrorType.DUPLICATE,
    ImportOutcomeStatus.UNKNOWN_FAILURE: ImportErrorType.UNKNOWN,
}


@dataclass(frozen=True)
class ImportOutcome:
    """
    Terminal result of one record's trip through the pipeline.

    ``message`` is what the caller sees; ``detail`` is the full reason kept
    for the audit trail. They only differ for unknown failures.
    """

    status: str
    row_number: int
    deal_id: str | None
    message: str | None = None
    detail: str | None = None

    @classmethod
    def success(cls, *, row_number: int, deal_id: str | None) -> ImportOutcome:
        return cls(status=ImportOutcomeStatus.SUCCESS, row_number=row_number, deal_id=deal_id)

    @classmethod
    def validation_failure(cls, *, row_number: int, deal_id: str | None, reason: str) -> ImportOutcome:
        return cls(
            status=ImportOutcomeStatus.VALIDATION_FAILURE,
            row_number=row_number,
            deal_id=deal_id,
            message=reason,
            detail=reason,
        )

    @classmethod
    def duplicate_failure(cls, *, row_number: int, deal_id: str | None, reason: str) -> ImportOutcome:
        return cls(
            status=ImportOutcomeStatus.DUPLICATE_FAILURE,
            row_number=row_number,
            deal_id=deal_id,
            message=reason,
            detail=reason,
        )

    @classmethod
    def unknown_failure(
        cls,
        *,
        row_number: int,
        deal_id: str | None,
        public_message: str,
        reason: str,
    ) -> ImportOutcome:
        return cls(
            status=ImportOutcomeStatus.UNKNOWN_FAILURE,
            row_number=row_number,
            deal_id=deal_id,
            message=public_message,
            detail=reason,
        )

    @property
    def is_success(self) -> bool:
        return self.status == ImportOutcomeStatus.SUCCESS

    @property
    def error_type(self) -> str | None:
        return _ERROR_TYPE_BY_STATUS.get(self.status)


@dataclass(frozen=True)
class ImportErrorDetail:
    """
    One non-success entry of an import summary.
    """

    row_number: int | None
    deal_id: str | None
    error_message: str
    error_type: str


@dataclass(frozen=True)
class ImportSummary:
    """
    End-of-run import summary.

    Invariant: total_records == successful_imports + failed_imports + duplicate_imports.
    """

    total_records: int
    successful_imports: int
    failed_imports: int
    duplicate_imports: int
    errors: list[ImportErrorDetail] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[ImportOutcome]) -> ImportSummary:
        total = success = failed = duplicate = 0
        errors: list[ImportErrorDetail] = []

        for outcome in outcomes:
            total += 1
            if outcome.status == ImportOutcomeStatus.SUCCESS:
                success += 1
                continue

            if outcome.status == ImportOutcomeStatus.DUPLICATE_FAILURE:
                duplicate += 1
            elif outcome.status in (
                ImportOutcomeStatus.VALIDATION_FAILURE,
                ImportOutcomeStatus.UNKNOWN_FAILURE,
            ):
                failed += 1
            else:
                raise ValueError(f"Unsupported import outcome status: {outcome.status!r}")

            errors.append(
                ImportErrorDetail(
                    row_number=outcome.row_number,
                    deal_id=outcome.deal_id,
                    error_message=outcome.message or "",
                    error_type=outcome.error_type or ImportErrorType.UNKNOWN,
                )
            )

        return cls(
            total_records=total,
            successful_imports=success,
            failed_imports=failed,
            duplicate_imports=duplicate,
            errors=errors,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "total_records": self.total_records,
            "successful_imports": self.successful_imports,
            "failed_imports": self.failed_imports,
            "duplicate_imports": self.duplicate_imports,
            "errors": [
                {
                    "row_number": error.row_number,
                    "deal_id": error.deal_id,
                    "error_message": error.error_message,
                    "error_type": error.error_type,
                }
                for error in self.errors
            ],
        }
