"""create_reporting_tables

Revision ID: a7c1e2d3f4b5
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a7c1e2d3f4b5'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _money(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.Numeric(precision=14, scale=2), nullable=nullable)


def _created_at() -> sa.Column:
    return sa.Column(
        'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False,
    )


def upgrade() -> None:
    """Create businesses and the per-category revenue tables."""
    op.create_table(
        'businesses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=True),
        sa.Column('business_type', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_businesses_owner', 'businesses', ['owner_id'])

    # ── Retail ────────────────────────────────────────────────────────────
    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sku', sa.String(length=50), nullable=True),
        sa.Column('category', sa.String(length=255), nullable=True),
        _money('buying_price', nullable=True),
        _money('selling_price'),
        sa.Column('stock_quantity', sa.Integer(), nullable=False),
        sa.Column('min_stock_level', sa.Integer(), nullable=True),
        sa.Column('unit', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        _created_at(),
        sa.CheckConstraint('selling_price >= 0', name='ck_product_selling_price_non_negative'),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_business', 'products', ['business_id'])

    op.create_table(
        'sales',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        sa.Column('cashier_id', sa.Uuid(), nullable=True),
        sa.Column('customer_name', sa.String(length=255), nullable=True),
        sa.Column('customer_phone', sa.String(length=50), nullable=True),
        _money('total_amount'),
        sa.Column('payment_method', sa.String(length=50), nullable=False),
        sa.Column('mpesa_code', sa.String(length=50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('receipt_number', sa.String(length=50), nullable=True),
        _created_at(),
        sa.CheckConstraint('total_amount >= 0', name='ck_sale_total_non_negative'),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('receipt_number'),
    )
    op.create_index('ix_sales_business', 'sales', ['business_id'])
    op.create_index('ix_sales_created_at', 'sales', ['created_at'])

    op.create_table(
        'sale_items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('sale_id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        _money('unit_price'),
        _money('total_price'),
        sa.ForeignKeyConstraint(['sale_id'], ['sales.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sale_items_sale', 'sale_items', ['sale_id'])

    # ── Rentals ───────────────────────────────────────────────────────────
    op.create_table(
        'tenants',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('unit_number', sa.String(length=50), nullable=False),
        _money('rent_amount'),
        sa.Column('lease_start', sa.Date(), nullable=True),
        sa.Column('lease_end', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tenants_business', 'tenants', ['business_id'])

    op.create_table(
        'rent_payments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        _money('amount'),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('mpesa_code', sa.String(length=50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        _created_at(),
        sa.CheckConstraint('amount >= 0', name='ck_rent_payment_amount_non_negative'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rent_payments_tenant', 'rent_payments', ['tenant_id'])
    op.create_index('ix_rent_payments_created_at', 'rent_payments', ['created_at'])

    # ── Schools ───────────────────────────────────────────────────────────
    op.create_table(
        'students',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        sa.Column('admission_number', sa.String(length=50), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=False),
        sa.Column('last_name', sa.String(length=255), nullable=False),
        sa.Column('class_level', sa.String(length=50), nullable=False),
        sa.Column('parent_name', sa.String(length=255), nullable=True),
        sa.Column('parent_phone', sa.String(length=50), nullable=True),
        _money('fee_amount'),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('admission_number'),
    )
    op.create_index('ix_students_business', 'students', ['business_id'])

    op.create_table(
        'fee_payments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('student_id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        _money('amount'),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('term', sa.String(length=50), nullable=True),
        sa.Column('mpesa_code', sa.String(length=50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        _created_at(),
        sa.CheckConstraint('amount >= 0', name='ck_fee_payment_amount_non_negative'),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_fee_payments_student', 'fee_payments', ['student_id'])
    op.create_index('ix_fee_payments_created_at', 'fee_payments', ['created_at'])

    # ── Hospitality ───────────────────────────────────────────────────────
    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('business_id', sa.Uuid(), nullable=False),
        sa.Column('room_id', sa.Uuid(), nullable=True),
        sa.Column('listing_id', sa.Uuid(), nullable=True),
        sa.Column('guest_name', sa.String(length=255), nullable=False),
        sa.Column('guest_phone', sa.String(length=50), nullable=False),
        sa.Column('guest_email', sa.String(length=255), nullable=True),
        sa.Column('check_in_date', sa.Date(), nullable=False),
        sa.Column('check_out_date', sa.Date(), nullable=False),
        sa.Column('guests_count', sa.Integer(), nullable=True),
        _money('total_amount'),
        _money('paid_amount', nullable=True),
        sa.Column('booking_status', sa.String(length=20), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        _created_at(),
        sa.CheckConstraint('check_out_date >= check_in_date', name='ck_booking_dates_ordered'),
        sa.CheckConstraint('paid_amount >= 0', name='ck_booking_paid_non_negative'),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_bookings_business', 'bookings', ['business_id'])
    op.create_index('ix_bookings_created_at', 'bookings', ['created_at'])


def downgrade() -> None:
    """Drop the reporting tables in reverse dependency order."""
    for index, table in [
        ('ix_bookings_created_at', 'bookings'),
        ('ix_bookings_business', 'bookings'),
        ('ix_fee_payments_created_at', 'fee_payments'),
        ('ix_fee_payments_student', 'fee_payments'),
        ('ix_students_business', 'students'),
        ('ix_rent_payments_created_at', 'rent_payments'),
        ('ix_rent_payments_tenant', 'rent_payments'),
        ('ix_tenants_business', 'tenants'),
        ('ix_sale_items_sale', 'sale_items'),
        ('ix_sales_created_at', 'sales'),
        ('ix_sales_business', 'sales'),
        ('ix_products_business', 'products'),
        ('ix_businesses_owner', 'businesses'),
    ]:
        op.drop_index(index, table_name=table)
    for table in [
        'bookings', 'fee_payments', 'students', 'rent_payments', 'tenants',
        'sale_items', 'sales', 'products', 'businesses',
    ]:
        op.drop_table(table)
