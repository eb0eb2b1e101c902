"""create instagram_leads table

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    lead_status_enum = postgresql.ENUM(
        'warm_lead', 'message_sent', 'sale_closed',
        name='lead_status',
        create_type=False
    )
    lead_status_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        'instagram_leads',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('instagram_id', sa.String(length=255), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('profile_url', sa.String(length=255), nullable=True),
        sa.Column('profile_picture_url', sa.Text(), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('followers', sa.Integer(), nullable=True),
        sa.Column('following', sa.Integer(), nullable=True),
        sa.Column('status', lead_status_enum, nullable=False, server_default='warm_lead'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('tags', sa.Text(), nullable=True),
        sa.Column('messages_sent', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_message_at', sa.DateTime(), nullable=True),
        sa.Column('date_added', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('last_updated', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index(op.f('ix_instagram_leads_username'), 'instagram_leads', ['username'], unique=False)
    op.create_index(op.f('ix_instagram_leads_status'), 'instagram_leads', ['status'], unique=False)
    op.create_index(op.f('ix_instagram_leads_date_added'), 'instagram_leads', ['date_added'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_instagram_leads_date_added'), table_name='instagram_leads')
    op.drop_index(op.f('ix_instagram_leads_status'), table_name='instagram_leads')
    op.drop_index(op.f('ix_instagram_leads_username'), table_name='instagram_leads')
    op.drop_table('instagram_leads')

    lead_status_enum = postgresql.ENUM('warm_lead', 'message_sent', 'sale_closed', name='lead_status')
    lead_status_enum.drop(op.get_bind(), checkfirst=True)
