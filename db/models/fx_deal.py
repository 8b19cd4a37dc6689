"""
db/models/fx_deal.py

Persisted FX deal. One row per unique caller-supplied deal_id.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, Float, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin

DEAL_ID_MAX_LENGTH = 255
DEAL_ID_UNIQUE_CONSTRAINT = "uq_fx_deals_deal_id"


class FxDeal(Base, CreatedAtMixin):
    __tablename__ = "fx_deals"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    deal_id: Mapped[str] = mapped_column(
        String(DEAL_ID_MAX_LENGTH),
        nullable=False,
        comment="Caller-supplied business key",
    )
    currency_from: Mapped[str] = mapped_column(String(3), nullable=False)
    currency_to: Mapped[str] = mapped_column(String(3), nullable=False)
    deal_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    deal_amount: Mapped[Decimal] = mapped_column(nullable=False)
    exchange_rate: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
        comment="Absent for CSV-imported deals",
    )

    __table_args__ = (
        UniqueConstraint("deal_id", name=DEAL_ID_UNIQUE_CONSTRAINT),
        Index("ix_fx_deals_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<FxDeal id={self.id} deal_id={self.deal_id!r} "
            f"{self.currency_from}->{self.currency_to} amount={self.deal_amount}>"
        )
