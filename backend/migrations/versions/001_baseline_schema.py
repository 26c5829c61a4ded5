"""baseline schema - models table

Revision ID: 001_baseline
Revises:
Create Date: 2026-09-02 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision = '001_baseline'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Baseline migration - creates the catalog table as first released.

    Idempotent: skips if 'models' already exists (created by db.create_all()).
    """
    bind = op.get_bind()
    inspector = inspect(bind)
    if 'models' in inspector.get_table_names():
        return

    op.create_table('models',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.Column('category', sa.String(length=100), nullable=False),
    sa.Column('description', sa.Text(), nullable=False),
    sa.Column('materials', sa.Text(), nullable=False),
    sa.Column('specifications', sa.Text(), nullable=False),
    sa.Column('file_path', sa.String(length=500), nullable=False),
    sa.Column('upload_date', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_models_upload_date'), 'models', ['upload_date'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_models_upload_date'), table_name='models')
    op.drop_table('models')
