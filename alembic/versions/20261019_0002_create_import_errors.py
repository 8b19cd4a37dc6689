"""create import_errors table

Revision ID: 20261019_0002
Revises: 20261019_0001
Create Date: 2026-10-19 09:05:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0002"
down_revision = "20261019_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "import_errors",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("row_number", sa.Integer(), nullable=True, comment="1-based data row, header excluded"),
        sa.Column("deal_id", sa.String(length=255), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=False),
        sa.Column("error_type", sa.String(length=50), nullable=False, comment="VALIDATION, DUPLICATE, UNKNOWN"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_import_errors_created_at", "import_errors", ["created_at"], unique=False)
    op.create_index("ix_import_errors_deal_id", "import_errors", ["deal_id"], unique=False)
    op.create_index("ix_import_errors_error_type", "import_errors", ["error_type"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_import_errors_error_type", table_name="import_errors")
    op.drop_index("ix_import_errors_deal_id", table_name="import_errors")
    op.drop_index("ix_import_errors_created_at", table_name="import_errors")
    op.drop_table("import_errors")
