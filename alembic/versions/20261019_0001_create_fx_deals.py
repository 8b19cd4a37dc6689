"""create fx_deals table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "fx_deals",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("deal_id", sa.String(length=255), nullable=False, comment="Caller-supplied business key"),
        sa.Column("currency_from", sa.String(length=3), nullable=False),
        sa.Column("currency_to", sa.String(length=3), nullable=False),
        sa.Column("deal_timestamp", sa.DateTime(timezone=False), nullable=False),
        sa.Column("deal_amount", sa.Numeric(precision=19, scale=4), nullable=False),
        sa.Column("exchange_rate", sa.Float(), nullable=True, comment="Absent for CSV-imported deals"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("deal_id", name="uq_fx_deals_deal_id"),
    )
    op.create_index("ix_fx_deals_created_at", "fx_deals", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_fx_deals_created_at", table_name="fx_deals")
    op.drop_table("fx_deals")
