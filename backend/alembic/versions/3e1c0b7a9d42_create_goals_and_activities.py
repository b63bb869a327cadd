"""create goals and activities tables

Revision ID: 3e1c0b7a9d42
Revises:
Create Date: 2025-12-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3e1c0b7a9d42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'goals' not in tables:
        op.create_table(
            'goals',
            sa.Column('id', sa.String(36), primary_key=True, nullable=False),
            sa.Column('user_id', sa.String(36), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('type', sa.String(20), nullable=False),
            sa.Column('target', sa.Float(), nullable=False),
            sa.Column('current_value', sa.Float(), server_default='0', nullable=False),
            sa.Column('unit', sa.String(), nullable=False),
            sa.Column('start_date', sa.Date(), nullable=False),
            sa.Column('deadline', sa.Date(), nullable=False),
            sa.Column('description', sa.String(), server_default='', nullable=False),
            sa.Column('status', sa.String(20), server_default='active', nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
            sa.CheckConstraint('start_date <= deadline', name='ck_goals_window'),
        )
        op.create_index('ix_goals_id', 'goals', ['id'])
        op.create_index('ix_goals_user_id', 'goals', ['user_id'])

    if 'activities' not in tables:
        op.create_table(
            'activities',
            sa.Column('id', sa.String(36), primary_key=True, nullable=False),
            sa.Column('user_id', sa.String(36), nullable=False),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('distance', sa.Float(), nullable=False),
            sa.Column('duration', sa.Integer(), nullable=False),
            sa.Column('pace', sa.Float(), nullable=False),
            sa.Column('location', sa.String(), server_default='', nullable=False),
            sa.Column('notes', sa.String(), server_default='', nullable=False),
            sa.Column('images', sa.Text(), server_default='[]', nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        )
        op.create_index('ix_activities_id', 'activities', ['id'])
        op.create_index('ix_activities_user_id', 'activities', ['user_id'])
        op.create_index('ix_activities_date', 'activities', ['date'])


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS activities')
    op.execute('DROP TABLE IF EXISTS goals')
