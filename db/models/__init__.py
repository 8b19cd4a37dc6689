"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.fx_deal import FxDeal
from db.models.import_error import ImportErrorRecord, ImportErrorType

__all__ = [
    "FxDeal",
    "ImportErrorRecord",
    "ImportErrorType",
]
