"""
app/api/routers/fx_deals.py

FX deal import and lookup endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_csv_upload, get_deal_store, get_error_recorder
from app.repositories.errors import DealNotFoundError
from app.schemas.fx_deals import FxDealCreateRequest, FxDealResponse, ImportSummaryResponse
from app.services.csv_deal_reader import CSVUpload, InvalidFileError
from app.services.deal_import_service import DealImportService, get_deal_import_service
from app.services.deal_store import TransactionalDealStore
from app.services.import_error_recorder import ImportErrorRecorder
from db.models.import_error import ImportErrorType

router = APIRouter(prefix="/fx-deals", tags=["fx-deals"])

_STATUS_BY_ERROR_TYPE: dict[str, int] = {
    ImportErrorType.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ImportErrorType.DUPLICATE: status.HTTP_409_CONFLICT,
    ImportErrorType.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.get("/{deal_id}", response_model=FxDealResponse)
def get_fx_deal(
    deal_id: str,
    store: TransactionalDealStore = Depends(get_deal_store),
) -> FxDealResponse:
    try:
        deal = store.get(deal_id)
    except DealNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return FxDealResponse.model_validate(deal)


@router.get("", response_model=list[FxDealResponse])
def list_fx_deals(
    store: TransactionalDealStore = Depends(get_deal_store),
) -> list[FxDealResponse]:
    return [FxDealResponse.model_validate(deal) for deal in store.list_all()]


@router.post("", response_model=ImportSummaryResponse, status_code=status.HTTP_201_CREATED)
def import_fx_deal(
    body: FxDealCreateRequest,
    store: TransactionalDealStore = Depends(get_deal_store),
    error_recorder: ImportErrorRecorder = Depends(get_error_recorder),
    import_service: DealImportService = Depends(get_deal_import_service),
) -> ImportSummaryResponse:
    """
    Import one deal.

    Responds 201 on success. A rejected deal maps to 400 (validation),
    409 (duplicate) or 500 (unexpected), with the summary as detail.
    """

    summary = import_service.import_deal(
        record=body.to_record(),
        store=store,
        error_sink=error_recorder,
    )
    if summary.errors:
        error_type = summary.errors[0].error_type
        raise HTTPException(
            status_code=_STATUS_BY_ERROR_TYPE.get(error_type, status.HTTP_500_INTERNAL_SERVER_ERROR),
            detail=summary.to_dict(),
        )
    return ImportSummaryResponse.from_summary(summary)


@router.post("/upload", response_model=ImportSummaryResponse, status_code=status.HTTP_201_CREATED)
def upload_fx_deals_csv(
    upload: CSVUpload = Depends(get_csv_upload),
    store: TransactionalDealStore = Depends(get_deal_store),
    error_recorder: ImportErrorRecorder = Depends(get_error_recorder),
    import_service: DealImportService = Depends(get_deal_import_service),
) -> ImportSummaryResponse:
    """
    Import every row of one CSV file. Bad rows are reported, not fatal.
    """

    try:
        summary = import_service.import_csv(
            upload=upload,
            store=store,
            error_sink=error_recorder,
        )
    except InvalidFileError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return ImportSummaryResponse.from_summary(summary)
