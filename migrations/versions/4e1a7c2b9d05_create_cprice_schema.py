"""Create cprice schema

Revision ID: 4e1a7c2b9d05
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4e1a7c2b9d05'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=10), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'permissions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('module', sa.String(length=50), nullable=False),
        sa.Column('action', sa.String(length=20), nullable=False),
        sa.Column('description', sa.String(length=200), nullable=True),
        sa.UniqueConstraint('module', 'action', name='uq_permission_module_action'),
    )

    op.create_table(
        'user_permissions',
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('permission_id', sa.Integer(), sa.ForeignKey('permissions.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'login_attempts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('ip', sa.String(length=64), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_login_attempts_ip', 'login_attempts', ['ip'])
    op.create_index('ix_login_attempt_ip_created', 'login_attempts', ['ip', 'created_at'])

    op.create_table(
        'business_types',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_business_types_code', 'business_types', ['code'], unique=True)

    op.create_table(
        'prices',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('business_type_id', sa.Integer(), sa.ForeignKey('business_types.id'), nullable=False),
        sa.Column('origin', sa.String(length=200), nullable=False),
        sa.Column('destination', sa.String(length=200), nullable=False),
        sa.Column('price_type', sa.String(length=10), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(length=10), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.Column('valid_from', sa.Date(), nullable=False),
        sa.Column('valid_to', sa.Date(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.String(length=64), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_prices_business_type_id', 'prices', ['business_type_id'])
    op.create_index('ix_prices_origin', 'prices', ['origin'])
    op.create_index('ix_prices_destination', 'prices', ['destination'])
    op.create_index('ix_prices_created_at', 'prices', ['created_at'])

    op.create_table(
        'announcements',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.String(length=64), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_announcements_created_at', 'announcements', ['created_at'])

    op.create_table(
        'customer_inquiries',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('customer_name', sa.String(length=100), nullable=False),
        sa.Column('customer_email', sa.String(length=120), nullable=False),
        sa.Column('customer_phone', sa.String(length=30), nullable=False),
        sa.Column('customer_region', sa.String(length=100), nullable=False),
        sa.Column('business_type', sa.String(length=50), nullable=False),
        sa.Column('origin', sa.String(length=200), nullable=False),
        sa.Column('destination', sa.String(length=200), nullable=False),
        sa.Column('cargo_description', sa.Text(), nullable=True),
        sa.Column('estimated_weight', sa.Float(), nullable=True),
        sa.Column('estimated_volume', sa.Float(), nullable=True),
        sa.Column('expected_ship_date', sa.String(length=20), nullable=True),
        sa.Column('additional_requirements', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('assigned_to', sa.String(length=64), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('assigned_at', sa.DateTime(), nullable=True),
        sa.Column('auto_release_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_customer_inquiries_customer_name', 'customer_inquiries', ['customer_name'])
    op.create_index('ix_customer_inquiries_customer_email', 'customer_inquiries', ['customer_email'])
    op.create_index('ix_customer_inquiries_customer_region', 'customer_inquiries', ['customer_region'])
    op.create_index('ix_customer_inquiries_business_type', 'customer_inquiries', ['business_type'])
    op.create_index('ix_customer_inquiries_status', 'customer_inquiries', ['status'])
    op.create_index('ix_customer_inquiries_assigned_to', 'customer_inquiries', ['assigned_to'])
    op.create_index('ix_customer_inquiries_created_at', 'customer_inquiries', ['created_at'])
    op.create_index('ix_customer_inquiries_status_release', 'customer_inquiries', ['status', 'auto_release_at'])


def downgrade():
    op.drop_table('customer_inquiries')
    op.drop_table('announcements')
    op.drop_table('prices')
    op.drop_table('business_types')
    op.drop_table('login_attempts')
    op.drop_table('user_permissions')
    op.drop_table('permissions')
    op.drop_table('users')
