"""
app/schemas package marker.
"""

from app.schemas.fx_deals import (
    FxDealCreateRequest,
    FxDealResponse,
    ImportErrorDetailResponse,
    ImportErrorRecordResponse,
    ImportSummaryResponse,
)

__all__ = [
    "FxDealCreateRequest",
    "FxDealResponse",
    "ImportErrorDetailResponse",
    "ImportErrorRecordResponse",
    "ImportSummaryResponse",
]
