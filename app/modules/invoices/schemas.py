"""
Invoice DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, date

from app.core.schemas import Amount, CamelModel
from .models import InvoiceStatus


# ============================================================================
# Request DTOs
# ============================================================================


class InvoiceFilterDto(BaseModel):
    """
    Query parameters for the invoice list.
    Each set field maps to exactly one SQL predicate in InvoicesService.
    """

    page: int = Field(1, ge=1, description="Page number (1-indexed)")
    limit: int = Field(10, ge=1, description="Items per page")
    search: Optional[str] = Field(
        None, description="Case-insensitive match on invoice id, vendor name or customer name"
    )

    @property
    def search_term(self) -> Optional[str]:
        term = (self.search or "").strip()
        return term or None


# ============================================================================
# Response DTOs - list
# ============================================================================


class InvoiceListItemResponse(CamelModel):
    """Flattened invoice row for the paginated table"""

    id: int
    invoice_id: str
    vendor: str
    vendor_id: str
    customer: str
    customer_id: str
    invoice_date: date = Field(..., alias="date")
    amount: Amount
    status: InvoiceStatus


class PaginationResponse(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class InvoiceListResponse(CamelModel):
    invoices: List[InvoiceListItemResponse]
    pagination: PaginationResponse


# ============================================================================
# Response DTOs - detail (nested models for relationships)
# ============================================================================


class VendorInInvoiceResponse(CamelModel):
    id: int
    vendor_id: str
    name: str
    category: str


class CustomerInInvoiceResponse(CamelModel):
    id: int
    customer_id: str
    name: str
    email: str


class LineItemResponse(CamelModel):
    id: int
    item_id: str
    description: str
    quantity: int
    unit_price: Amount
    total: Amount


class PaymentResponse(CamelModel):
    id: int
    payment_id: str
    payment_date: date
    amount: Amount
    method: str


class InvoiceDetailResponse(CamelModel):
    """Full invoice projection with vendor, customer, line items and payments"""

    id: int
    invoice_id: str
    vendor: VendorInInvoiceResponse
    customer: CustomerInInvoiceResponse
    invoice_date: date
    due_date: date
    total_amount: Amount
    status: InvoiceStatus
    line_items: List[LineItemResponse]
    payments: List[PaymentResponse]
    created_at: datetime
    updated_at: datetime
