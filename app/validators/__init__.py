"""
app/validators package marker.
"""

from app.validators.currency_codes import ISO_4217_CURRENCY_CODES
from app.validators.fx_deal_validator import DealValidationError, FxDealValidator

__all__ = [
    "DealValidationError",
    "FxDealValidator",
    "ISO_4217_CURRENCY_CODES",
]
