"""Initial migration - create stored_results table

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Uploaded / fetched results.json datasets
    op.create_table(
        'stored_results',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('source_url', sa.String(500), nullable=True),
        sa.Column('size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('record_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('filter_state', sa.JSON(), nullable=True),
        sa.Column('upload_date', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_stored_results_name', 'stored_results', ['name'])
    op.create_index('ix_stored_results_upload_date', 'stored_results', ['upload_date'])


def downgrade() -> None:
    op.drop_index('ix_stored_results_upload_date', table_name='stored_results')
    op.drop_index('ix_stored_results_name', table_name='stored_results')
    op.drop_table('stored_results')
