"""initial

Revision ID: 4b1d2c9e7a10
Revises: 
Create Date: 2026-10-19 10:12:31.504218

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4b1d2c9e7a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('villager', 'volunteer', name='userrole')
report_status = sa.Enum('PENDING', 'IN_PROGRESS', 'COMPLETED', name='reportstatus')
gift_category = sa.Enum('badge', 'trophy', 'crown', name='giftcategory')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('name', sa.String(255)),
        sa.Column('email', sa.String(255), unique=True, index=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('points', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'user_points_log',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('delta', sa.Integer(), nullable=False),
        sa.Column('reason', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now(), nullable=False)
    )

    op.create_table(
        'trash_reports',
        sa.Column('id', sa.String(64), primary_key=True, index=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id')),
        sa.Column('description', sa.Text),
        sa.Column('latitude', sa.Float, nullable=False),
        sa.Column('longitude', sa.Float, nullable=False),
        sa.Column('image_url', sa.String),
        sa.Column('status', report_status, nullable=False, index=True),
        sa.Column('created_at', sa.DateTime, nullable=False, index=True),
    )

    op.create_table(
        'cleanings',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('report_id', sa.String(64), sa.ForeignKey('trash_reports.id', ondelete='CASCADE'),
                  nullable=False, unique=True),
        sa.Column('volunteer_id', sa.Integer, sa.ForeignKey('users.id')),
        sa.Column('after_image_url', sa.String),
        sa.Column('cleaned_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'virtual_gifts',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('image_url', sa.String(255)),
        sa.Column('points_cost', sa.Integer, nullable=False),
        sa.Column('category', gift_category, nullable=False),
    )

    op.create_table(
        'user_gifts',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('gift_id', sa.Integer, sa.ForeignKey('virtual_gifts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('redeemed_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('user_gifts')
    op.drop_table('virtual_gifts')
    op.drop_table('cleanings')
    op.drop_table('trash_reports')
    op.drop_table('user_points_log')
    op.drop_table('users')

    bind = op.get_bind()
    gift_category.drop(bind, checkfirst=True)
    report_status.drop(bind, checkfirst=True)
    user_role.drop(bind, checkfirst=True)
