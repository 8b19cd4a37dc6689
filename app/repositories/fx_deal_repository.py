"""
app/repositories/fx_deal_repository.py

Persistence layer for FX deals keyed by deal_id.
"""

from __future__ import annotations

import logging

from sqlalchemy import Select, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.fx_deal import DealRecord
from app.repositories.errors import DealNotFoundError, DuplicateDealError
from db.models.fx_deal import FxDeal

logger = logging.getLogger(__name__)


class FxDealRepository:
    """
    Repository for FX deal lookups and duplicate-safe inserts.

    Transaction boundaries belong to the caller; ``insert`` only guards
    its own write with a SAVEPOINT.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def exists(self, deal_id: str) -> bool:
        stmt = select(exists().where(FxDeal.deal_id == deal_id))
        return bool(self._session.scalar(stmt))

    def insert(self, record: DealRecord) -> FxDeal:
        """
        Insert a validated deal unless its deal_id is already stored.

        The unique constraint on deal_id is the final authority: a
        constraint violation during flush is reported as a duplicate, which
        covers concurrent imports racing past the existence check.
        """

        if record.deal_id is None:
            raise ValueError("deal_id is required to persist a deal.")

        if self.exists(record.deal_id):
            logger.warning("Duplicate deal detected deal_id=%r", record.deal_id)
            raise DuplicateDealError(record.deal_id)

        deal = FxDeal(
            deal_id=record.deal_id,
            currency_from=record.currency_from,
            currency_to=record.currency_to,
            deal_timestamp=record.deal_timestamp,
            deal_amount=record.deal_amount,
            exchange_rate=record.exchange_rate,
        )
        try:
            with self._session.begin_nested():
                self._session.add(deal)
        except IntegrityError as exc:
            logger.warning("Unique constraint rejected deal_id=%r", record.deal_id)
            raise DuplicateDealError(record.deal_id) from exc

        self._session.refresh(deal)
        return deal

    def get(self, deal_id: str) -> FxDeal:
        stmt = select(FxDeal).where(FxDeal.deal_id == deal_id)
        deal = self._session.scalars(stmt).first()
        if deal is None:
            raise DealNotFoundError(deal_id)
        return deal

    def list_all(self, *, limit: int | None = None, offset: int = 0) -> list[FxDeal]:
        stmt: Select[tuple[FxDeal]] = select(FxDeal).order_by(FxDeal.id)
        if offset:
            stmt = stmt.offset(max(0, offset))
        if limit is not None:
            stmt = stmt.limit(max(1, limit))
        return list(self._session.scalars(stmt).all())
