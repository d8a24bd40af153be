"""
Seed file DTOs - one denormalized invoice record per array element.

Keys follow the dataset's snake_case layout:
{
    "invoice_id": "INV-001",
    "vendor": {"vendor_id": "V1", "name": "Acme", "category": "Office"},
    "customer": {"customer_id": "C1", "name": "...", "email": "..."},
    "invoice_date": "2024-03-15",
    "due_date": "2024-04-14",
    "total_amount": 150.0,
    "status": "pending",
    "line_items": [{"item_id": ..., "description": ..., "quantity": ..., "unit_price": ..., "total": ...}],
    "payments": [{"payment_id": ..., "payment_date": ..., "amount": ..., "method": ...}]
}
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter

from app.modules.invoices.models import InvoiceStatus


def _date_part(value):
    """Keep only the calendar date of "2024-03-15" or "2024-03-15T00:00:00Z"."""
    if isinstance(value, str):
        return value.strip()[:10]
    return value


CalendarDate = Annotated[date, BeforeValidator(_date_part)]


class VendorRecord(BaseModel):
    vendor_id: str = Field(..., min_length=1)
    name: str
    category: str


class CustomerRecord(BaseModel):
    customer_id: str = Field(..., min_length=1)
    name: str
    email: str


class LineItemRecord(BaseModel):
    item_id: str = Field(..., min_length=1)
    description: str
    quantity: int = Field(..., ge=0)
    unit_price: Decimal
    total: Decimal


class PaymentRecord(BaseModel):
    payment_id: str = Field(..., min_length=1)
    payment_date: CalendarDate
    amount: Decimal
    method: str


class InvoiceRecord(BaseModel):
    invoice_id: str = Field(..., min_length=1)
    vendor: VendorRecord
    customer: CustomerRecord
    invoice_date: CalendarDate
    due_date: CalendarDate
    total_amount: Decimal
    status: InvoiceStatus
    line_items: List[LineItemRecord] = Field(default_factory=list)
    payments: List[PaymentRecord] = Field(default_factory=list)


InvoiceRecordList = TypeAdapter(List[InvoiceRecord])


@dataclass
class SeedReport:
    """Counts of rows written by one seeding run"""

    vendors: int = 0
    customers: int = 0
    invoices: int = 0
    line_items: int = 0
    payments: int = 0
    warnings: List[str] = field(default_factory=list)
