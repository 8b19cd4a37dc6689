"""
db/models/import_error.py

Append-only audit trail of per-row import failures.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin


class ImportErrorType:
    VALIDATION = "VALIDATION"
    DUPLICATE = "DUPLICATE"
    UNKNOWN = "UNKNOWN"


class ImportErrorRecord(Base, CreatedAtMixin):
    __tablename__ = "import_errors"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    row_number: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="1-based data row, header excluded",
    )
    deal_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    error_message: Mapped[str] = mapped_column(Text, nullable=False)
    error_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="VALIDATION, DUPLICATE, UNKNOWN",
    )

    __table_args__ = (
        Index("ix_import_errors_error_type", "error_type"),
        Index("ix_import_errors_deal_id", "deal_id"),
        Index("ix_import_errors_created_at", "created_at"),
    )
