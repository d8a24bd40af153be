"""
Analytics Router - FastAPI endpoints for the dashboard widgets.
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.engine import get_db_util
from .service import AnalyticsService
from .schemas import (
    StatsResponse,
    InvoiceTrendResponse,
    TopVendorResponse,
    CategorySpendResponse,
    CashOutflowResponse,
)

router = APIRouter(tags=["analytics"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(db: AsyncSession = Depends(get_db_util)):
    """
    Get headline dashboard figures.

    Returns:
        - totalSpendYTD: Sum of invoice totals dated in the current calendar year
        - totalInvoicesProcessed: Number of those invoices
        - documentsUploaded: Number of all invoices
        - averageInvoiceValue: Average invoice total over all invoices
    """
    return await AnalyticsService.get_stats(db)


@router.get("/invoice-trends", response_model=List[InvoiceTrendResponse])
async def get_invoice_trends(db: AsyncSession = Depends(get_db_util)):
    """Invoice count and total spend per month, oldest month first"""
    return await AnalyticsService.get_invoice_trends(db)


@router.get("/vendors/top10", response_model=List[TopVendorResponse])
async def get_top_vendors(db: AsyncSession = Depends(get_db_util)):
    """Ten vendors with the highest total invoiced spend"""
    return await AnalyticsService.get_top_vendors(db, limit=10)


@router.get("/category-spend", response_model=List[CategorySpendResponse])
async def get_category_spend(db: AsyncSession = Depends(get_db_util)):
    """Total spend per vendor category"""
    return await AnalyticsService.get_category_spend(db)


@router.get("/cash-outflow", response_model=List[CashOutflowResponse])
async def get_cash_outflow(db: AsyncSession = Depends(get_db_util)):
    """Forecast of pending invoice payments grouped by due month"""
    return await AnalyticsService.get_cash_outflow(db)
