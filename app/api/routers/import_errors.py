"""
app/api/routers/import_errors.py

Read-only access to the import audit trail.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.repositories.import_error_repository import ImportErrorRepository
from app.schemas.fx_deals import ImportErrorRecordResponse
from db.session import get_db

router = APIRouter(prefix="/import-errors", tags=["import-errors"])


@router.get("", response_model=list[ImportErrorRecordResponse])
def list_import_errors(
    limit: int = Query(default=100, ge=1, le=1000, description="Max records returned, newest first"),
    error_type: str | None = Query(default=None, description="VALIDATION, DUPLICATE or UNKNOWN"),
    deal_id: str | None = Query(default=None, description="Optional deal_id filter"),
    db: Session = Depends(get_db),
) -> list[ImportErrorRecordResponse]:
    records = ImportErrorRepository(db).list_recent(
        limit=limit,
        error_type=error_type.strip().upper() if error_type else None,
        deal_id=deal_id,
    )
    return [ImportErrorRecordResponse.model_validate(record) for record in records]
