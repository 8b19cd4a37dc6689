"""
app/api/dependencies.py

Shared FastAPI dependencies for FX deal endpoints.
"""

from __future__ import annotations

from fastapi import Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.services.csv_deal_reader import CSVUpload
from app.services.deal_store import TransactionalDealStore
from app.services.import_error_recorder import ImportErrorRecorder
from db.session import get_db


def get_csv_upload(file: UploadFile = File(...)) -> CSVUpload:
    """
    Read the multipart upload into memory and release the spooled file.

    Content-type and emptiness checks belong to CSVDealReader.
    """

    try:
        content = file.file.read()
    finally:
        file.file.close()

    return CSVUpload(
        content=content,
        content_type=file.content_type,
        filename=file.filename,
    )


def get_deal_store(db: Session = Depends(get_db)) -> TransactionalDealStore:
    return TransactionalDealStore(db)


def get_error_recorder(db: Session = Depends(get_db)) -> ImportErrorRecorder:
    return ImportErrorRecorder(db)
