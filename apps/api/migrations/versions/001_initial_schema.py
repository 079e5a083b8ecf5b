"""Initial schema for users, catalog, orders, payments, reviews and token blacklist

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def audit_columns() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('created_by', sa.String(100), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_by', sa.String(100), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_by', sa.String(100), nullable=True),
    ]


def upgrade() -> None:
    user_role = sa.Enum('CUSTOMER', 'OWNER', 'MANAGER', 'MASTER', 'ANONYMOUS', name='user_role')
    order_type = sa.Enum('DELIVERY', 'TAKEOUT', name='order_type')
    order_status = sa.Enum('PENDING', 'CANCELED', 'COMPLETED', name='order_status')
    payment_method = sa.Enum('CARD', 'CASH', name='payment_method')
    payment_status = sa.Enum('COMPLETED', 'CANCELED', name='payment_status')

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('role', user_role, nullable=False),
        *audit_columns(),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        *audit_columns(),
    )

    op.create_table(
        'restaurants',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category_id', sa.Uuid(), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('is_hidden', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *audit_columns(),
    )
    op.create_index('ix_restaurants_name', 'restaurants', ['name'])
    op.create_index('ix_restaurants_category_id', 'restaurants', ['category_id'])
    op.create_index('ix_restaurants_owner_id', 'restaurants', ['owner_id'])

    op.create_table(
        'menus',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('restaurant_id', sa.Uuid(), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('is_hidden', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *audit_columns(),
    )
    op.create_index('ix_menus_restaurant_id', 'menus', ['restaurant_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('customer_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('restaurant_id', sa.Uuid(), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('order_type', order_type, nullable=False),
        sa.Column('status', order_status, nullable=False),
        sa.Column('delivery_address', sa.String(255), nullable=True),
        sa.Column('request', sa.Text(), nullable=True),
        sa.Column('total_price', sa.Integer(), nullable=False, server_default='0'),
        *audit_columns(),
    )
    op.create_index('ix_orders_customer_id', 'orders', ['customer_id'])
    op.create_index('ix_orders_restaurant_id', 'orders', ['restaurant_id'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('order_id', sa.Uuid(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('menu_id', sa.Uuid(), sa.ForeignKey('menus.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Integer(), nullable=False),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('order_id', sa.Uuid(), sa.ForeignKey('orders.id'), nullable=False, unique=True),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('method', payment_method, nullable=False),
        sa.Column('status', payment_status, nullable=False),
        *audit_columns(),
    )

    op.create_table(
        'reviews',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('order_id', sa.Uuid(), sa.ForeignKey('orders.id'), nullable=False, unique=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        *audit_columns(),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_reviews_rating_range'),
    )

    op.create_table(
        'token_blacklist',
        sa.Column('token_hash', sa.String(64), primary_key=True),
        sa.Column('reason', sa.String(20), nullable=False, server_default='rotated'),
        sa.Column('blacklisted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_token_blacklist_expires', 'token_blacklist', ['expires_at'])


def downgrade() -> None:
    op.drop_table('token_blacklist')
    op.drop_table('reviews')
    op.drop_table('payments')
    op.drop_table('order_items')
    op.drop_table('orders')
    op.drop_table('menus')
    op.drop_table('restaurants')
    op.drop_table('categories')
    op.drop_table('users')
    for enum_name in ('payment_status', 'payment_method', 'order_status', 'order_type', 'user_role'):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
