"""
Invoices Router - paginated search and invoice detail.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.engine import get_db_util
from .service import InvoicesService
from .schemas import InvoiceFilterDto, InvoiceListResponse, InvoiceDetailResponse

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=InvoiceListResponse)
async def get_invoices(
    filters: Annotated[InvoiceFilterDto, Query()],
    db: AsyncSession = Depends(get_db_util),
):
    """
    Get invoices, newest first, with pagination and optional search.

    Query parameters:
    - page: Page number, starting at 1 (default 1)
    - limit: Page size (default 10)
    - search: Matches invoice id, vendor name or customer name (case-insensitive)

    Examples:
    - GET /invoices?page=2&limit=20
    - GET /invoices?search=acme
    """
    return await InvoicesService.find_all(db=db, filters=filters)


@router.get("/{invoice_id}", response_model=InvoiceDetailResponse)
async def get_invoice_by_id(
    invoice_id: str,
    db: AsyncSession = Depends(get_db_util),
):
    """Get one invoice by its invoice id, including line items and payments"""
    return await InvoicesService.find_one(db, invoice_id)
