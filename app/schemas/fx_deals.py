"""
app/schemas/fx_deals.py

Request and response schemas for FX deal endpoints.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from app.domain.fx_deal import DealRecord, ImportSummary
from app.validators.fx_deal_validator import MAX_AMOUNT_INTEGER_DIGITS


class FxDealCreateRequest(BaseModel):
    """
    JSON body for a single-deal import.

    Business rules (currency codes, amount scale, future timestamps) are
    left to FxDealValidator so the JSON and CSV paths share one rule set.
    """

    deal_id: str = Field(..., description="Caller-supplied unique deal identifier")
    currency_from: str = Field(..., description="ISO 4217 code of the sold currency")
    currency_to: str = Field(..., description="ISO 4217 code of the bought currency")
    deal_timestamp: datetime
    deal_amount: Decimal
    exchange_rate: float = Field(..., gt=0)

    @field_validator("deal_amount")
    @classmethod
    def _check_integer_digits(cls, value: Decimal) -> Decimal:
        if value.is_finite() and value.adjusted() + 1 > MAX_AMOUNT_INTEGER_DIGITS:
            raise ValueError(f"deal_amount cannot have more than {MAX_AMOUNT_INTEGER_DIGITS} integer digits")
        return value

    @field_validator("deal_timestamp")
    @classmethod
    def _to_naive_local(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    def to_record(self) -> DealRecord:
        return DealRecord(
            deal_id=self.deal_id,
            currency_from=self.currency_from,
            currency_to=self.currency_to,
            deal_timestamp=self.deal_timestamp,
            deal_amount=self.deal_amount,
            exchange_rate=self.exchange_rate,
        )


class FxDealResponse(BaseModel):
    id: int
    deal_id: str
    currency_from: str
    currency_to: str
    deal_timestamp: datetime
    deal_amount: Decimal
    exchange_rate: float | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ImportErrorDetailResponse(BaseModel):
    """
    API response model for one failed record of an import.
    """

    row_number: int | None = Field(default=None, ge=1)
    deal_id: str | None = None
    error_message: str
    error_type: str


class ImportSummaryResponse(BaseModel):
    """
    API response model for an import summary.
    """

    total_records: int = Field(..., ge=0)
    successful_imports: int = Field(..., ge=0)
    failed_imports: int = Field(..., ge=0)
    duplicate_imports: int = Field(..., ge=0)
    errors: list[ImportErrorDetailResponse] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: ImportSummary) -> ImportSummaryResponse:
        return cls(
            total_records=summary.total_records,
            successful_imports=summary.successful_imports,
            failed_imports=summary.failed_imports,
            duplicate_imports=summary.duplicate_imports,
            errors=[
                ImportErrorDetailResponse(
                    row_number=error.row_number,
                    deal_id=error.deal_id,
                    error_message=error.error_message,
                    error_type=error.error_type,
                )
                for error in summary.errors
            ],
        )


class ImportErrorRecordResponse(BaseModel):
    id: int
    row_number: int | None
    deal_id: str | None
    error_message: str
    error_type: str
    created_at: datetime

    model_config = {"from_attributes": True}
