"""
app/services package marker.
"""

from app.services.csv_deal_reader import (
    ACCEPTED_CONTENT_TYPES,
    CSVDealReader,
    CSVStructureError,
    CSVUpload,
    InvalidFileError,
)
from app.services.deal_import_service import (
    DealImportService,
    DealStore,
    ErrorSink,
    get_deal_import_service,
)
from app.services.deal_store import DealPersistenceError, TransactionalDealStore
from app.services.import_error_recorder import ImportErrorRecorder

__all__ = [
    "ACCEPTED_CONTENT_TYPES",
    "CSVDealReader",
    "CSVStructureError",
    "CSVUpload",
    "DealImportService",
    "DealPersistenceError",
    "DealStore",
    "ErrorSink",
    "ImportErrorRecorder",
    "InvalidFileError",
    "TransactionalDealStore",
    "get_deal_import_service",
]
