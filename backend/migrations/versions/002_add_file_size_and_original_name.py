"""add file_size and original_name to models

Revision ID: 002_add_file_metadata
Revises: 001_baseline
Create Date: 2026-09-20 00:00:00.000000

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision = "002_add_file_metadata"
down_revision = "001_baseline"
branch_labels = None
depends_on = None


def _column_exists(table_name: str, column_name: str) -> bool:
    """Check if column exists (idempotent migrations for SQLite)."""
    bind = op.get_bind()
    inspector = inspect(bind)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def upgrade() -> None:
    """Record the stored size and the client-side filename of each upload."""
    if not _column_exists("models", "file_size"):
        op.add_column("models", sa.Column("file_size", sa.Integer(), nullable=True))
    if not _column_exists("models", "original_name"):
        op.add_column("models", sa.Column("original_name", sa.String(length=500), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("models") as batch_op:
        if _column_exists("models", "original_name"):
            batch_op.drop_column("original_name")
        if _column_exists("models", "file_size"):
            batch_op.drop_column("file_size")
