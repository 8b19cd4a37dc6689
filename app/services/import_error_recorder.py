"""
app/services/import_error_recorder.py

Durable audit sink for per-row import failures.

Every call commits its own unit of work. Storage failures are logged and
swallowed: auditing is best effort and never changes an import result.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.import_error_repository import ImportErrorRepository
from db.models.fx_deal import DEAL_ID_MAX_LENGTH

logger = logging.getLogger(__name__)


class ImportErrorRecorder:
    def __init__(self, session: Session) -> None:
        self._session = session
        self._repository = ImportErrorRepository(session)

    def record(
        self,
        *,
        row_number: int | None,
        deal_id: str | None,
        message: str,
        error_type: str,
    ) -> None:
        # Over-long ids are themselves a validation failure; keep a prefix.
        if deal_id is not None and len(deal_id) > DEAL_ID_MAX_LENGTH:
            deal_id = deal_id[:DEAL_ID_MAX_LENGTH]

        try:
            self._repository.add(
                row_number=row_number,
                deal_id=deal_id,
                error_message=message,
                error_type=error_type,
            )
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            logger.exception(
                "Failed to record import error row=%s deal_id=%r type=%s",
                row_number,
                deal_id,
                error_type,
            )
