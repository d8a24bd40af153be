import enum
from datetime import date
from decimal import Decimal
from sqlalchemy import (
    String,
    Date,
    Numeric,
    Integer,
    ForeignKey,
    Enum as SQLEnum,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.core.db.base import BaseModel

if TYPE_CHECKING:
    from app.modules.vendors.models import Vendor
    from app.modules.customers.models import Customer


class InvoiceStatus(str, enum.Enum):
    """Invoice status enum"""

    paid = "paid"
    pending = "pending"
    overdue = "overdue"


class Invoice(BaseModel):
    """
    Invoice model - one bill from a vendor to a customer.
    Extends BaseModel which provides: id, created_at, updated_at

    Vendor and customer are referenced by their business keys, so the
    seeder can write invoices without looking up surrogate ids first.
    Deleting the vendor or customer cascades to the invoice, and from
    there to its line items and payments.
    """

    __tablename__ = "invoices"

    # Indexes for performance
    __table_args__ = (
        Index("idx_invoice_vendor_id", "vendor_id"),
        Index("idx_invoice_customer_id", "customer_id"),
        Index("idx_invoice_status_due_date", "status", "due_date"),
    )

    invoice_id: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True
    )

    # Foreign Keys (business keys)
    vendor_id: Mapped[str] = mapped_column(
        ForeignKey("vendors.vendor_id", ondelete="CASCADE", name="fk_invoice_vendor_id"),
        nullable=False,
    )

    customer_id: Mapped[str] = mapped_column(
        ForeignKey("customers.customer_id", ondelete="CASCADE", name="fk_invoice_customer_id"),
        nullable=False,
    )

    invoice_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # 15 digits total, 2 decimal places
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
    )

    status: Mapped[InvoiceStatus] = mapped_column(
        SQLEnum(InvoiceStatus, name="invoice_status_enum", native_enum=False, length=20),
        nullable=False,
        default=InvoiceStatus.pending,
    )

    # Relationships
    vendor: Mapped["Vendor"] = relationship("Vendor", back_populates="invoices")

    customer: Mapped["Customer"] = relationship("Customer", back_populates="invoices")

    line_items: Mapped[list["LineItem"]] = relationship(
        "LineItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="LineItem.id",
    )

    payments: Mapped[list["Payment"]] = relationship(
        "Payment",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Payment.id",
    )

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, invoice_id='{self.invoice_id}', status={self.status.value}, total={self.total_amount})>"


class LineItem(BaseModel):
    """
    Line item on an invoice.
    `total` is expected to be quantity * unit_price but is stored as given.
    """

    __tablename__ = "line_items"

    __table_args__ = (
        Index("idx_line_item_invoice_id", "invoice_id"),
    )

    item_id: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True
    )

    invoice_id: Mapped[int] = mapped_column(
        ForeignKey("invoices.id", ondelete="CASCADE", name="fk_line_item_invoice_id"),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(String(500), nullable=False)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    unit_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
    )

    total: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
    )

    # Relationships
    invoice: Mapped["Invoice"] = relationship("Invoice", back_populates="line_items")

    def __repr__(self) -> str:
        return f"<LineItem(id={self.id}, item_id='{self.item_id}', qty={self.quantity}, total={self.total})>"


class Payment(BaseModel):
    """
    Payment recorded against an invoice.
    Partial payments are allowed; payments need not add up to the invoice total.
    """

    __tablename__ = "payments"

    __table_args__ = (
        Index("idx_payment_invoice_id", "invoice_id"),
    )

    payment_id: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True
    )

    invoice_id: Mapped[int] = mapped_column(
        ForeignKey("invoices.id", ondelete="CASCADE", name="fk_payment_invoice_id"),
        nullable=False,
    )

    payment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
    )

    # Free text (e.g. "bank_transfer", "credit_card")
    method: Mapped[str] = mapped_column(String(50), nullable=False)

    # Relationships
    invoice: Mapped["Invoice"] = relationship("Invoice", back_populates="payments")

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, payment_id='{self.payment_id}', amount={self.amount}, method={self.method})>"
