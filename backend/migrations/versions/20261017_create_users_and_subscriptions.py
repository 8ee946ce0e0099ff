"""create users and subscriptions

Revision ID: 20261017_billing
Revises:
Create Date: 2026-10-17 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_billing'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

plan_type = sa.Enum('FREE', 'PREMIUM', name='plantype')
billing_period = sa.Enum('MONTHLY', 'YEARLY', name='billingperiod')


def upgrade() -> None:
    """Create users and subscriptions.

    users.customer_id is nullable (bound on first checkout) and unique when set.
    subscriptions.user_id is unique: one row per user, updated in place.
    """
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('customer_id', sa.String(), nullable=True),
        sa.Column('plan', plan_type, nullable=False, server_default='FREE'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('customer_id', name='uq_users_customer_id'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('plan', plan_type, nullable=False),
        sa.Column('period', billing_period, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', name='uq_subscriptions_user_id'),
    )
    op.create_index('ix_subscriptions_id', 'subscriptions', ['id'])


def downgrade() -> None:
    """Revert schema changes."""
    op.drop_index('ix_subscriptions_id', table_name='subscriptions')
    op.drop_table('subscriptions')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
    billing_period.drop(op.get_bind(), checkfirst=True)
    plan_type.drop(op.get_bind(), checkfirst=True)
