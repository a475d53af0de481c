"""Add sheet_rows table for the SQL-backed tabular store.

Revision ID: 001_sheet_rows
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa

revision = "001_sheet_rows"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sheet_rows",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sheet", sa.String(), nullable=False),
        sa.Column("row_index", sa.Integer(), nullable=False),
        sa.Column("cells", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sheet_rows_sheet_row", "sheet_rows", ["sheet", "row_index"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_sheet_rows_sheet_row", table_name="sheet_rows")
    op.drop_table("sheet_rows")
