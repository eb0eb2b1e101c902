"""create instagram_posts table

Revision ID: 004
Revises: 003
Create Date: 2026-10-20 10:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '004'
down_revision: Union[str, None] = '003'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'instagram_posts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('post_url', sa.String(length=500), nullable=False),
        sa.Column('post_description', sa.Text(), nullable=True),
        sa.Column('engagement_stats', sa.JSON(), nullable=False, server_default='{}'),
        sa.Column('post_date', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('added_to_warm_leads', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('added_to_warm_leads_date', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_instagram_posts_post_date'), 'instagram_posts', ['post_date'], unique=False)
    op.create_index(op.f('ix_instagram_posts_added_to_warm_leads'), 'instagram_posts', ['added_to_warm_leads'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_instagram_posts_added_to_warm_leads'), table_name='instagram_posts')
    op.drop_index(op.f('ix_instagram_posts_post_date'), table_name='instagram_posts')
    op.drop_table('instagram_posts')
