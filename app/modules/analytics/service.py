"""
AnalyticsService - aggregated dashboard metrics.

Every grouping and sum runs in SQL (GROUP BY); rows are never loaded
into Python just to be added up.
"""

from datetime import date
from typing import List, Optional
from sqlalchemy import Float, select, func, extract
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.utils import month_key, year_bounds
from app.modules.invoices.models import Invoice, InvoiceStatus
from app.modules.vendors.models import Vendor
from .schemas import (
    StatsResponse,
    InvoiceTrendResponse,
    TopVendorResponse,
    CategorySpendResponse,
    CashOutflowResponse,
)


class AnalyticsService:
    """
    Dashboard queries. All methods are pure reads.
    """

    @staticmethod
    async def get_stats(db: AsyncSession, today: Optional[date] = None) -> StatsResponse:
        """
        Year-to-date spend and count, total invoice count and average value.

        Args:
            today: Reference date for the current year (defaults to date.today())
        """
        start_of_year, end_of_year = year_bounds(today or date.today())

        ytd = (
            await db.execute(
                select(
                    func.coalesce(func.sum(Invoice.total_amount), 0),
                    func.count(Invoice.id),
                ).where(
                    Invoice.invoice_date >= start_of_year,
                    Invoice.invoice_date <= end_of_year,
                )
            )
        ).one()

        overall = (
            await db.execute(
                select(
                    func.count(Invoice.id),
                    func.avg(Invoice.total_amount, type_=Float),
                )
            )
        ).one()

        return StatsResponse(
            total_spend_ytd=ytd[0],
            total_invoices_processed=ytd[1],
            documents_uploaded=overall[0],
            average_invoice_value=overall[1],
        )

    @staticmethod
    async def get_invoice_trends(db: AsyncSession) -> List[InvoiceTrendResponse]:
        """Invoice count and spend per month of invoice_date, oldest first."""
        year = extract("year", Invoice.invoice_date)
        month = extract("month", Invoice.invoice_date)

        result = await db.execute(
            select(
                year.label("year"),
                month.label("month"),
                func.count(Invoice.id).label("invoice_count"),
                func.sum(Invoice.total_amount).label("total_spend"),
            )
            .group_by(year, month)
            .order_by(year, month)
        )

        return [
            InvoiceTrendResponse(
                month=month_key(row.year, row.month),
                invoice_count=row.invoice_count,
                total_spend=row.total_spend,
            )
            for row in result
        ]

    @staticmethod
    async def get_top_vendors(db: AsyncSession, limit: int = 10) -> List[TopVendorResponse]:
        """
        Vendors ranked by total invoiced spend, highest first.

        Vendors without invoices count as 0. Equal totals keep vendor
        creation order (surrogate id ascending).
        """
        total_spend = func.coalesce(func.sum(Invoice.total_amount), 0)

        result = await db.execute(
            select(
                Vendor.vendor_id,
                Vendor.name,
                Vendor.category,
                total_spend.label("total_spend"),
            )
            .outerjoin(Invoice, Invoice.vendor_id == Vendor.vendor_id)
            .group_by(Vendor.id, Vendor.vendor_id, Vendor.name, Vendor.category)
            .order_by(total_spend.desc(), Vendor.id.asc())
            .limit(limit)
        )

        return [
            TopVendorResponse(
                vendor_id=row.vendor_id,
                name=row.name,
                category=row.category,
                total_spend=row.total_spend,
            )
            for row in result
        ]

    @staticmethod
    async def get_category_spend(db: AsyncSession) -> List[CategorySpendResponse]:
        """Total invoiced spend per vendor category, ordered by category name."""
        spend = func.coalesce(func.sum(Invoice.total_amount), 0)

        result = await db.execute(
            select(Vendor.category, spend.label("spend"))
            .outerjoin(Invoice, Invoice.vendor_id == Vendor.vendor_id)
            .group_by(Vendor.category)
            .order_by(Vendor.category)
        )

        return [
            CategorySpendResponse(category=row.category, spend=row.spend)
            for row in result
        ]

    @staticmethod
    async def get_cash_outflow(db: AsyncSession) -> List[CashOutflowResponse]:
        """Pending invoice totals per month of due_date, soonest first."""
        year = extract("year", Invoice.due_date)
        month = extract("month", Invoice.due_date)

        result = await db.execute(
            select(
                year.label("year"),
                month.label("month"),
                func.sum(Invoice.total_amount).label("amount"),
            )
            .where(Invoice.status == InvoiceStatus.pending)
            .group_by(year, month)
            .order_by(year, month)
        )

        return [
            CashOutflowResponse(month=month_key(row.year, row.month), amount=row.amount)
            for row in result
        ]
