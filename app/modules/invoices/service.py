"""
InvoicesService - paginated invoice search and invoice detail lookups.
"""

from typing import Optional
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, joinedload, selectinload
from sqlalchemy.sql.selectable import Select

from app.core.exceptions import NotFoundError
from app.core.pagination import paginate_query, build_pagination_meta
from app.modules.customers.models import Customer
from app.modules.vendors.models import Vendor
from .models import Invoice
from .schemas import (
    InvoiceFilterDto,
    InvoiceListItemResponse,
    InvoiceListResponse,
    InvoiceDetailResponse,
)


class InvoicesService:
    """
    Read-only invoice queries.
    All methods use async/await and a single round trip per concern.
    """

    @staticmethod
    def _apply_filters(query: Select, filters: InvoiceFilterDto) -> Select:
        """Translate the typed filter into SQL predicates."""
        term = filters.search_term
        if term:
            # Literal substring match: % and _ in the term are escaped
            query = query.where(
                or_(
                    Invoice.invoice_id.icontains(term, autoescape=True),
                    Vendor.name.icontains(term, autoescape=True),
                    Customer.name.icontains(term, autoescape=True),
                )
            )
        return query

    @staticmethod
    async def find_all(
        db: AsyncSession,
        filters: Optional[InvoiceFilterDto] = None,
    ) -> InvoiceListResponse:
        """
        Find invoices newest first, optionally filtered by a search term.

        Ties on invoice_date are broken by id (descending) so consecutive
        pages never overlap.

        Args:
            filters: page, limit and optional search term

        Returns:
            Invoices of the requested page plus pagination metadata, where
            `total` counts every invoice matching the search
        """
        filters = filters or InvoiceFilterDto()

        query = (
            select(Invoice)
            .join(Invoice.vendor)
            .join(Invoice.customer)
            .options(contains_eager(Invoice.vendor), contains_eager(Invoice.customer))
        )
        query = InvoicesService._apply_filters(query, filters)
        query = query.order_by(Invoice.invoice_date.desc(), Invoice.id.desc())

        invoices, total = await paginate_query(db, query, filters.page, filters.limit)

        return InvoiceListResponse(
            invoices=[
                InvoiceListItemResponse(
                    id=invoice.id,
                    invoice_id=invoice.invoice_id,
                    vendor=invoice.vendor.name,
                    vendor_id=invoice.vendor.vendor_id,
                    customer=invoice.customer.name,
                    customer_id=invoice.customer.customer_id,
                    invoice_date=invoice.invoice_date,
                    amount=invoice.total_amount,
                    status=invoice.status,
                )
                for invoice in invoices
            ],
            pagination=build_pagination_meta(total, filters.page, filters.limit),
        )

    @staticmethod
    async def find_one(db: AsyncSession, invoice_id: str) -> InvoiceDetailResponse:
        """
        Find a single invoice by its business key with all related rows.

        Raises:
            NotFoundError: If no invoice has this invoice_id
        """
        result = await db.execute(
            select(Invoice)
            .where(Invoice.invoice_id == invoice_id)
            .options(
                joinedload(Invoice.vendor),
                joinedload(Invoice.customer),
                selectinload(Invoice.line_items),
                selectinload(Invoice.payments),
            )
        )
        invoice = result.scalar_one_or_none()

        if not invoice:
            raise NotFoundError("Invoice", invoice_id)

        return InvoiceDetailResponse.model_validate(invoice)
