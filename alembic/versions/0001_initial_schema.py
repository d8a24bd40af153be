"""Initial analytics schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

Creates vendors, customers, invoices, line_items and payments.
- Every business key (vendor_id, customer_id, invoice_id, item_id, payment_id) is unique
- Invoices reference vendors/customers by business key
- All invoice-referencing foreign keys cascade on delete
- Invoice status stored as VARCHAR (native_enum=False in models)
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list:
    return [
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""

    op.create_table('vendors',
        sa.Column('vendor_id', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        *_base_columns(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_vendors_vendor_id'), 'vendors', ['vendor_id'], unique=True)
    op.create_index(op.f('ix_vendors_name'), 'vendors', ['name'], unique=False)
    op.create_index(op.f('ix_vendors_category'), 'vendors', ['category'], unique=False)

    op.create_table('customers',
        sa.Column('customer_id', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        *_base_columns(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_customers_customer_id'), 'customers', ['customer_id'], unique=True)
    op.create_index(op.f('ix_customers_name'), 'customers', ['name'], unique=False)

    op.create_table('invoices',
        sa.Column('invoice_id', sa.String(length=100), nullable=False),
        sa.Column('vendor_id', sa.String(length=100), nullable=False),
        sa.Column('customer_id', sa.String(length=100), nullable=False),
        sa.Column('invoice_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('total_amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_base_columns(),
        sa.ForeignKeyConstraint(['vendor_id'], ['vendors.vendor_id'], name='fk_invoice_vendor_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.customer_id'], name='fk_invoice_customer_id', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_invoices_invoice_id'), 'invoices', ['invoice_id'], unique=True)
    op.create_index(op.f('ix_invoices_invoice_date'), 'invoices', ['invoice_date'], unique=False)
    op.create_index(op.f('ix_invoices_due_date'), 'invoices', ['due_date'], unique=False)
    op.create_index('idx_invoice_vendor_id', 'invoices', ['vendor_id'], unique=False)
    op.create_index('idx_invoice_customer_id', 'invoices', ['customer_id'], unique=False)
    op.create_index('idx_invoice_status_due_date', 'invoices', ['status', 'due_date'], unique=False)

    op.create_table('line_items',
        sa.Column('item_id', sa.String(length=100), nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('total', sa.Numeric(precision=15, scale=2), nullable=False),
        *_base_columns(),
        sa.ForeignKeyConstraint(['invoice_id'], ['invoices.id'], name='fk_line_item_invoice_id', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_line_items_item_id'), 'line_items', ['item_id'], unique=True)
    op.create_index('idx_line_item_invoice_id', 'line_items', ['invoice_id'], unique=False)

    op.create_table('payments',
        sa.Column('payment_id', sa.String(length=100), nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('method', sa.String(length=50), nullable=False),
        *_base_columns(),
        sa.ForeignKeyConstraint(['invoice_id'], ['invoices.id'], name='fk_payment_invoice_id', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_payments_payment_id'), 'payments', ['payment_id'], unique=True)
    op.create_index(op.f('ix_payments_payment_date'), 'payments', ['payment_date'], unique=False)
    op.create_index('idx_payment_invoice_id', 'payments', ['invoice_id'], unique=False)


def downgrade() -> None:
    """Drop all tables, children first."""
    op.drop_table('payments')
    op.drop_table('line_items')
    op.drop_table('invoices')
    op.drop_table('customers')
    op.drop_table('vendors')
