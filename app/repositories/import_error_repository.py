"""
app/repositories/import_error_repository.py

Append-only persistence for import audit records.
"""

from __future__ import annotations

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from db.models.import_error import ImportErrorRecord


class ImportErrorRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def add(
        self,
        *,
        row_number: int | None,
        deal_id: str | None,
        error_message: str,
        error_type: str,
    ) -> ImportErrorRecord:
        record = ImportErrorRecord(
            row_number=row_number,
            deal_id=deal_id,
            error_message=error_message,
            error_type=error_type,
        )
        self._session.add(record)
        self._session.flush()
        return record

    def list_recent(
        self,
        *,
        limit: int = 100,
        error_type: str | None = None,
        deal_id: str | None = None,
    ) -> list[ImportErrorRecord]:
        stmt: Select[tuple[ImportErrorRecord]] = select(ImportErrorRecord)

        if error_type:
            stmt = stmt.where(ImportErrorRecord.error_type == error_type)
        if deal_id:
            stmt = stmt.where(ImportErrorRecord.deal_id == deal_id)

        stmt = stmt.order_by(ImportErrorRecord.id.desc()).limit(max(1, limit))
        return list(self._session.scalars(stmt).all())
