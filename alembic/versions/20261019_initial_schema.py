"""initial_schema

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

order_status = sa.Enum(
    'PENDING', 'CONFIRMED', 'PROCESSING', 'OUT_FOR_DELIVERY', 'DELIVERED', 'CANCELLED',
    name='orderstatus',
)
payment_status = sa.Enum('PENDING', 'PAID', 'FAILED', 'REFUNDED', name='paymentstatus')
subscription_status = sa.Enum('ACTIVE', 'PAUSED', 'CANCELLED', name='subscriptionstatus')
delivery_frequency = sa.Enum('DAILY', 'WEEKLY', 'BIWEEKLY', 'MONTHLY', name='deliveryfrequency')


def upgrade():
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=True, unique=True),
        sa.Column('domain', sa.String(), nullable=True, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('logo', sa.String(), nullable=True),
        sa.Column('contact_email', sa.String(), nullable=True),
        sa.Column('contact_phone', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('email', 'tenant_id', name='uq_user_email_tenant'),
    )

    op.create_table(
        'user_tenants',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('user_id', 'tenant_id', name='uq_user_tenant'),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('image', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_seasonal', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_products_tenant', 'products', ['tenant_id'])
    op.create_index('idx_products_tenant_category', 'products', ['tenant_id', 'category'])

    op.create_table(
        'cart_items',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('product_id', sa.String(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('user_id', 'product_id', 'tenant_id', name='uq_cart_user_product_tenant'),
    )

    op.create_table(
        'addresses',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('address_line1', sa.String(), nullable=False),
        sa.Column('address_line2', sa.String(), nullable=True),
        sa.Column('city', sa.String(), nullable=False),
        sa.Column('state', sa.String(), nullable=False),
        sa.Column('pincode', sa.String(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'warehouses',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('city', sa.String(), nullable=True),
        sa.Column('pincode', sa.String(), nullable=True),
        sa.Column('zone', sa.String(), nullable=True),
        sa.Column('contact_name', sa.String(), nullable=True),
        sa.Column('contact_phone', sa.String(), nullable=True),
        sa.Column('contact_email', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_warehouses_tenant', 'warehouses', ['tenant_id', 'is_active'])

    op.create_table(
        'product_stocks',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('warehouse_id', sa.String(), sa.ForeignKey('warehouses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.String(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.UniqueConstraint('warehouse_id', 'product_id', name='uq_stock_warehouse_product'),
    )

    op.create_table(
        'subscription_packages',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('frequency', delivery_frequency, nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('duration_weeks', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('package_id', sa.String(), sa.ForeignKey('subscription_packages.id'), nullable=False),
        sa.Column('address_id', sa.String(), sa.ForeignKey('addresses.id'), nullable=False),
        sa.Column('status', subscription_status, nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('next_delivery_date', sa.Date(), nullable=True),
        sa.Column('paused_until', sa.Date(), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'orders',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('order_number', sa.String(), nullable=False, unique=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('address_id', sa.String(), sa.ForeignKey('addresses.id'), nullable=True),
        sa.Column('warehouse_id', sa.String(), sa.ForeignKey('warehouses.id'), nullable=True),
        sa.Column('delivery_partner_id', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('subscription_id', sa.String(), sa.ForeignKey('subscriptions.id'), nullable=True),
        sa.Column('status', order_status, nullable=False),
        sa.Column('payment_status', payment_status, nullable=False),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('discount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('points_redeemed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('delivered_at', sa.DateTime(), nullable=True),
    )
    op.create_index('idx_orders_tenant', 'orders', ['tenant_id'])
    op.create_index('idx_orders_tenant_user', 'orders', ['tenant_id', 'user_id'])
    op.create_index('idx_orders_partner', 'orders', ['delivery_partner_id'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('order_id', sa.String(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.String(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('product_name', sa.String(), nullable=False),
    )

    op.create_table(
        'loyalty_transactions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('order_id', sa.String(), sa.ForeignKey('orders.id'), nullable=True),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('reason', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_loyalty_user_tenant', 'loyalty_transactions', ['user_id', 'tenant_id'])

    op.create_table(
        'store_configs',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('label', sa.String(), nullable=True),
        sa.Column('type', sa.String(), nullable=False, server_default='string'),
        sa.Column('category', sa.String(), nullable=False, server_default='general'),
        sa.UniqueConstraint('tenant_id', 'key', name='uq_store_config_tenant_key'),
    )


def downgrade():
    op.drop_table('store_configs')
    op.drop_index('idx_loyalty_user_tenant', table_name='loyalty_transactions')
    op.drop_table('loyalty_transactions')
    op.drop_table('order_items')
    op.drop_index('idx_orders_partner', table_name='orders')
    op.drop_index('idx_orders_tenant_user', table_name='orders')
    op.drop_index('idx_orders_tenant', table_name='orders')
    op.drop_table('orders')
    op.drop_table('subscriptions')
    op.drop_table('subscription_packages')
    op.drop_table('product_stocks')
    op.drop_index('idx_warehouses_tenant', table_name='warehouses')
    op.drop_table('warehouses')
    op.drop_table('addresses')
    op.drop_table('cart_items')
    op.drop_index('idx_products_tenant_category', table_name='products')
    op.drop_index('idx_products_tenant', table_name='products')
    op.drop_table('products')
    op.drop_table('user_tenants')
    op.drop_table('users')
    op.drop_table('tenants')

    bind = op.get_bind()
    for enum in (order_status, payment_status, subscription_status, delivery_frequency):
        enum.drop(bind, checkfirst=True)
