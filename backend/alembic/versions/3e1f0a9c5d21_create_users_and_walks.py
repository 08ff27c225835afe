"""create users and walks tables

Revision ID: 3e1f0a9c5d21
Revises:
Create Date: 2025-03-05 05:59:21.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3e1f0a9c5d21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(32), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('goal_type', sa.String(20), server_default='steps', nullable=False),
        sa.Column('goal_value', sa.Float(), server_default='10000', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint("goal_type IN ('steps', 'distance')", name='ck_users_goal_type'),
        sa.CheckConstraint('goal_value > 0', name='ck_users_goal_value_positive'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'walks',
        sa.Column('id', sa.String(32), nullable=False),
        sa.Column('user_id', sa.String(32), nullable=False),
        sa.Column('steps', sa.Integer(), nullable=False),
        sa.Column('distance', sa.Float(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint('steps >= 0', name='ck_walks_steps_nonneg'),
        sa.CheckConstraint('distance >= 0', name='ck_walks_distance_nonneg'),
        sa.CheckConstraint('duration >= 0', name='ck_walks_duration_nonneg'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_walks_user_id_date', 'walks', ['user_id', 'date'])
    op.create_index('ix_walks_date', 'walks', ['date'])


def downgrade() -> None:
    op.drop_index('ix_walks_date', table_name='walks')
    op.drop_index('ix_walks_user_id_date', table_name='walks')
    op.drop_table('walks')
    op.drop_table('users')
