"""create metrics table

Revision ID: 005
Revises: 004
Create Date: 2026-10-20 10:10:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '005'
down_revision: Union[str, None] = '004'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'metrics',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('invites_sent', sa.Integer(), nullable=False),
        sa.Column('invites_accepted', sa.Integer(), nullable=False),
        sa.Column('acceptance_ratio', sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_metrics_date'), 'metrics', ['date'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_metrics_date'), table_name='metrics')
    op.drop_table('metrics')
