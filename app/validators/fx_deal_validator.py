"""
app/validators/fx_deal_validator.py

Business-rule validation for one candidate FX deal.

Rules run in a fixed order and the first violation wins:

    1. deal_id present and at most 255 characters
    2. currency_from present, three uppercase letters, known ISO 4217 code
    3. currency_to, same checks
    4. currency_from != currency_to
    5. deal_timestamp present and not after now + max_future_skew
    6. deal_amount present, finite, > 0, at most 4 decimal places and
       15 integer digits
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection
from datetime import datetime, timedelta
from decimal import Decimal

from app.domain.fx_deal import DealRecord
from app.validators.currency_codes import ISO_4217_CURRENCY_CODES

logger = logging.getLogger(__name__)

MAX_DEAL_ID_LENGTH = 255
MAX_AMOUNT_SCALE = 4
MAX_AMOUNT_INTEGER_DIGITS = 15
DEFAULT_MAX_FUTURE_SKEW = timedelta(days=1)

_CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


class DealValidationError(ValueError):
    """
    Raised when a candidate deal breaks a business rule.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class FxDealValidator:
    """
    Stateless rule engine for candidate deals.
    """

    def __init__(
        self,
        *,
        currency_codes: Collection[str] = ISO_4217_CURRENCY_CODES,
        max_future_skew: timedelta = DEFAULT_MAX_FUTURE_SKEW,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._currency_codes = frozenset(currency_codes)
        self._max_future_skew = max_future_skew
        self._clock = clock or datetime.now

    def validate(self, record: DealRecord) -> None:
        """
        Raise DealValidationError for the first rule ``record`` breaks.
        """

        logger.debug("Validating FX deal deal_id=%r", record.deal_id)

        self._validate_deal_id(record.deal_id)
        self._validate_currency_code(record.currency_from, label="From currency", field="currency_from")
        self._validate_currency_code(record.currency_to, label="To currency", field="currency_to")
        self._validate_different_currencies(record.currency_from, record.currency_to)
        self._validate_deal_timestamp(record.deal_timestamp)
        self._validate_deal_amount(record.deal_amount)

    def _validate_deal_id(self, deal_id: str | None) -> None:
        if deal_id is None or not deal_id.strip():
            raise DealValidationError("Deal unique ID cannot be empty", field="deal_id")
        if len(deal_id) > MAX_DEAL_ID_LENGTH:
            raise DealValidationError(
                f"Deal unique ID exceeds maximum length of {MAX_DEAL_ID_LENGTH} characters",
                field="deal_id",
            )

    def _validate_currency_code(self, code: str | None, *, label: str, field: str) -> None:
        if code is None or not code.strip():
            raise DealValidationError(f"{label} ISO code cannot be empty", field=field)
        if not _CURRENCY_CODE_PATTERN.match(code):
            raise DealValidationError(f"{label} must be a 3-letter uppercase ISO code", field=field)
        if code not in self._currency_codes:
            raise DealValidationError(
                f"{label} '{code}' is not a valid ISO 4217 currency code",
                field=field,
            )

    @staticmethod
    def _validate_different_currencies(currency_from: str | None, currency_to: str | None) -> None:
        if currency_from is not None and currency_from == currency_to:
            raise DealValidationError(
                "From currency and To currency must be different",
                field="currency_to",
            )

    def _validate_deal_timestamp(self, deal_timestamp: datetime | None) -> None:
        if deal_timestamp is None:
            raise DealValidationError("Deal timestamp cannot be null", field="deal_timestamp")
        if deal_timestamp.tzinfo is not None:
            deal_timestamp = deal_timestamp.astimezone().replace(tzinfo=None)

        max_allowed = self._clock() + self._max_future_skew
        if deal_timestamp > max_allowed:
            raise DealValidationError(
                f"Deal timestamp cannot be more than {_describe_skew(self._max_future_skew)} in the future",
                field="deal_timestamp",
            )

    @staticmethod
    def _validate_deal_amount(deal_amount: Decimal | None) -> None:
        if deal_amount is None:
            raise DealValidationError("Deal amount cannot be null", field="deal_amount")
        if not deal_amount.is_finite():
            raise DealValidationError("Deal amount must be a finite number", field="deal_amount")
        if deal_amount <= 0:
            raise DealValidationError("Deal amount must be greater than zero", field="deal_amount")

        exponent = deal_amount.as_tuple().exponent
        scale = -exponent if isinstance(exponent, int) else 0
        if scale > MAX_AMOUNT_SCALE:
            raise DealValidationError(
                f"Deal amount cannot have more than {MAX_AMOUNT_SCALE} decimal places",
                field="deal_amount",
            )
        if deal_amount.adjusted() + 1 > MAX_AMOUNT_INTEGER_DIGITS:
            raise DealValidationError(
                f"Deal amount cannot have more than {MAX_AMOUNT_INTEGER_DIGITS} integer digits",
                field="deal_amount",
            )


def _describe_skew(skew: timedelta) -> str:
    if skew.total_seconds() % 86400 == 0:
        days = int(skew.total_seconds() // 86400)
        return f"{days} day" if days == 1 else f"{days} days"
    hours = skew.total_seconds() / 3600
    return f"{hours:g} hours"
