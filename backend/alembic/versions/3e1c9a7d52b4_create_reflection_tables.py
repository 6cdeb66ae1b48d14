"""create goals, check_ins, shares and user_profiles

Revision ID: 3e1c9a7d52b4
Revises:
Create Date: 2026-01-12 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3e1c9a7d52b4'
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
            sa.Column('id', sa.String(length=32), primary_key=True, nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.String(), nullable=False),
            sa.Column('year', sa.Integer(), nullable=False),
            sa.Column('order', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index('ix_goals_user_id', 'goals', ['user_id'])
        op.create_index('ix_goals_user_year', 'goals', ['user_id', 'year'])

    if 'check_ins' not in tables:
        op.create_table(
            'check_ins',
            sa.Column('id', sa.String(length=32), primary_key=True, nullable=False),
            sa.Column('goal_id', sa.String(length=32), nullable=False),
            sa.Column('week_number', sa.Integer(), nullable=False),
            sa.Column('year', sa.Integer(), nullable=False),
            sa.Column('reflection', sa.String(), nullable=False),
            sa.Column('progress_rating', sa.Integer(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.UniqueConstraint('goal_id', 'week_number', 'year', name='uq_check_ins_goal_week'),
        )
        op.create_index('ix_check_ins_goal_id', 'check_ins', ['goal_id'])

    if 'shares' not in tables:
        op.create_table(
            'shares',
            sa.Column('id', sa.String(length=32), primary_key=True, nullable=False),
            sa.Column('owner_id', sa.String(), nullable=False),
            sa.Column('shared_with_id', sa.String(), nullable=False),
            sa.Column('goal_id', sa.String(length=32), nullable=False),
            sa.Column('owner_name', sa.String(), nullable=False),
            sa.Column('shared_with_email', sa.String(), nullable=False),
            sa.Column('goal_title', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.UniqueConstraint('owner_id', 'shared_with_id', 'goal_id', name='uq_shares_owner_recipient_goal'),
        )
        op.create_index('ix_shares_owner_id', 'shares', ['owner_id'])
        op.create_index('ix_shares_shared_with_id', 'shares', ['shared_with_id'])
        op.create_index('ix_shares_goal_id', 'shares', ['goal_id'])

    if 'user_profiles' not in tables:
        op.create_table(
            'user_profiles',
            sa.Column('uid', sa.String(), primary_key=True, nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('display_name', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index('ix_user_profiles_email', 'user_profiles', ['email'], unique=True)


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS user_profiles')
    op.execute('DROP TABLE IF EXISTS shares')
    op.execute('DROP TABLE IF EXISTS check_ins')
    op.execute('DROP TABLE IF EXISTS goals')
