"""
app/domain package marker.
"""

from app.domain.fx_deal import (
    DealRecord,
    ImportErrorDetail,
    ImportOutcome,
    ImportOutcomeStatus,
    ImportSummary,
    RowCandidate,
)

__all__ = [
    "DealRecord",
    "ImportErrorDetail",
    "ImportOutcome",
    "ImportOutcomeStatus",
    "ImportSummary",
    "RowCandidate",
]
