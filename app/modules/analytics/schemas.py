"""
Analytics DTOs (Data Transfer Objects) for the dashboard endpoints
"""

from pydantic import Field

from app.core.schemas import Amount, Average, CamelModel


class StatsResponse(CamelModel):
    """Headline figures for the dashboard cards"""

    total_spend_ytd: Amount = Field(..., alias="totalSpendYTD", description="Sum of invoice totals dated this calendar year")
    total_invoices_processed: int = Field(..., description="Invoices dated this calendar year")
    documents_uploaded: int = Field(..., description="All invoices")
    average_invoice_value: Average = Field(..., description="Average invoice total over all invoices")


class InvoiceTrendResponse(CamelModel):
    month: str = Field(..., description="YYYY-MM of invoice_date")
    invoice_count: int
    total_spend: Amount


class TopVendorResponse(CamelModel):
    vendor_id: str
    name: str
    category: str
    total_spend: Amount


class CategorySpendResponse(CamelModel):
    category: str
    spend: Amount


class CashOutflowResponse(CamelModel):
    month: str = Field(..., description="YYYY-MM of due_date")
    amount: Amount
