"""add_customers_and_orders

Revision ID: 3f2a9c1d7b54
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b54'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email_address', sa.String(length=255), nullable=False, comment='邮箱'),
        sa.Column('first_name', sa.String(length=100), nullable=False, server_default='', comment='名'),
        sa.Column('last_name', sa.String(length=100), nullable=False, server_default='', comment='姓'),
        sa.Column('stripe_customer_id', sa.String(length=255), nullable=True, comment='Stripe 客户ID（解析后缓存）'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='创建时间'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='更新时间'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_customers_id', 'customers', ['id'], unique=False)
    op.create_index('ix_customers_email_address', 'customers', ['email_address'], unique=False)
    op.create_index('ix_customers_stripe_customer_id', 'customers', ['stripe_customer_id'], unique=False)

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('code', sa.String(length=100), nullable=False, comment='订单号'),
        sa.Column('currency_code', sa.String(length=3), nullable=False, comment='货币代码 ISO-4217'),
        sa.Column('total_with_tax', sa.Integer(), nullable=False, server_default='0', comment='含税总额（×100）'),
        sa.Column('customer_id', sa.Integer(), nullable=True, comment='关联客户ID'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='创建时间'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='更新时间'),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_orders_id', 'orders', ['id'], unique=False)
    op.create_index('ix_orders_code', 'orders', ['code'], unique=True)
    op.create_index('ix_orders_customer_id', 'orders', ['customer_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_orders_customer_id', table_name='orders')
    op.drop_index('ix_orders_code', table_name='orders')
    op.drop_index('ix_orders_id', table_name='orders')
    op.drop_table('orders')
    op.drop_index('ix_customers_stripe_customer_id', table_name='customers')
    op.drop_index('ix_customers_email_address', table_name='customers')
    op.drop_index('ix_customers_id', table_name='customers')
    op.drop_table('customers')
