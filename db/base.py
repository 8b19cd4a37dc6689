"""
db/base.py

Declarative base and the created_at mixin shared by every table.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import DateTime, Numeric, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Money columns hold up to 15 integer digits and 4 decimal places.
MONEY = Numeric(19, 4)


class Base(DeclarativeBase):
    type_annotation_map: dict[type, Any] = {
        Decimal: MONEY,
    }


class CreatedAtMixin:
    """
    Write-once insert timestamp, assigned by the database server.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
