"""
app/services/deal_store.py

Deal store that gives every insert its own committed unit of work.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.fx_deal import DealRecord
from app.repositories.errors import DuplicateDealError
from app.repositories.fx_deal_repository import FxDealRepository
from db.models.fx_deal import FxDeal


class DealPersistenceError(RuntimeError):
    """
    Raised when a deal cannot be stored for a reason other than a duplicate.
    """


class TransactionalDealStore:
    """
    Commits after each successful insert and rolls back after each failed
    one, so one record's failure never undoes another record's write.
    """

    def __init__(self, session: Session, repository: FxDealRepository | None = None) -> None:
        self._session = session
        self._repository = repository or FxDealRepository(session)

    def exists(self, deal_id: str) -> bool:
        return self._repository.exists(deal_id)

    def insert(self, record: DealRecord) -> FxDeal:
        try:
            deal = self._repository.insert(record)
            self._session.commit()
        except DuplicateDealError:
            self._session.rollback()
            raise
        except IntegrityError as exc:
            # Deferred unique checks surface on COMMIT rather than on flush.
            self._session.rollback()
            raise DuplicateDealError(record.deal_id) from exc
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise DealPersistenceError(
                f"Failed to persist deal '{record.deal_id}': {exc}"
            ) from exc
        return deal

    def get(self, deal_id: str) -> FxDeal:
        return self._repository.get(deal_id)

    def list_all(self) -> list[FxDeal]:
        return self._repository.list_all()
