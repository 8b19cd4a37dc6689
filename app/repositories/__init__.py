"""
app/repositories package marker.
"""

from app.repositories.errors import DealNotFoundError, DealRepositoryError, DuplicateDealError
from app.repositories.fx_deal_repository import FxDealRepository
from app.repositories.import_error_repository import ImportErrorRepository

__all__ = [
    "DealNotFoundError",
    "DealRepositoryError",
    "DuplicateDealError",
    "FxDealRepository",
    "ImportErrorRepository",
]
