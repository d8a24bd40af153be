"""
SeedService - loads the denormalized invoice dataset into the relational schema.

One run:
1. Parse and validate the whole JSON file
2. Delete payments, line items, invoices, vendors, customers (children first)
3. Deduplicate vendors/customers by business key (last record wins)
4. Upsert each vendor and customer
5. Create every invoice together with its line items and payments

Any write error aborts the run. Invoices committed before the failure stay.
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Tuple, Union

from pydantic import ValidationError
from sqlalchemy import delete, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.engine import Database
from app.modules.customers.models import Customer
from app.modules.invoices.models import Invoice, LineItem, Payment
from app.modules.vendors.models import Vendor
from .schemas import (
    CustomerRecord,
    InvoiceRecord,
    InvoiceRecordList,
    SeedReport,
    VendorRecord,
)

logger = logging.getLogger(__name__)

_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


class SeedError(Exception):
    """Raised when the seed file cannot be read or a write fails."""


class SeedService:
    """
    Batch loader for the analytics dataset.
    Not exposed over HTTP; run through the `invoice-seed` CLI.
    """

    @staticmethod
    def load_records(path: Union[str, Path]) -> List[InvoiceRecord]:
        """
        Read and validate the seed file.

        Raises:
            SeedError: If the file is missing/unreadable, is not valid JSON,
                or a record does not match the expected layout
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SeedError(f"Cannot read seed file {path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SeedError(f"Malformed JSON in {path}: {e}") from e

        try:
            return InvoiceRecordList.validate_python(data)
        except ValidationError as e:
            raise SeedError(f"Invalid invoice records in {path}: {e}") from e

    @staticmethod
    def dedupe_parties(
        records: List[InvoiceRecord],
    ) -> Tuple[Dict[str, VendorRecord], Dict[str, CustomerRecord]]:
        """
        Collect unique vendors and customers in one scan.
        A key seen more than once keeps its last record.
        """
        vendors: Dict[str, VendorRecord] = {}
        customers: Dict[str, CustomerRecord] = {}
        for record in records:
            vendors[record.vendor.vendor_id] = record.vendor
            customers[record.customer.customer_id] = record.customer
        return vendors, customers

    @staticmethod
    def check_totals(record: InvoiceRecord) -> List[str]:
        """
        Report arithmetic inconsistencies in a record.
        Inconsistent records are still stored as given.
        """
        warnings = []
        for item in record.line_items:
            expected = Decimal(item.quantity) * item.unit_price
            if expected.quantize(Decimal("0.01")) != item.total.quantize(Decimal("0.01")):
                warnings.append(
                    f"{record.invoice_id}/{item.item_id}: total {item.total} != quantity x unit price {expected}"
                )
        if record.line_items:
            items_sum = sum((item.total for item in record.line_items), Decimal("0"))
            if items_sum.quantize(Decimal("0.01")) != record.total_amount.quantize(Decimal("0.01")):
                warnings.append(
                    f"{record.invoice_id}: total_amount {record.total_amount} != sum of line items {items_sum}"
                )
        return warnings

    @staticmethod
    async def clear(db: AsyncSession) -> None:
        """Delete all rows, children before parents."""
        for model in (Payment, LineItem, Invoice, Vendor, Customer):
            await db.execute(delete(model))

    @staticmethod
    def _insert_for(db: AsyncSession):
        dialect = db.get_bind().dialect.name
        try:
            return _INSERTS[dialect]
        except KeyError:
            raise SeedError(f"Upsert is not supported for the {dialect} dialect") from None

    @staticmethod
    async def upsert_vendor(db: AsyncSession, vendor: VendorRecord) -> None:
        insert = SeedService._insert_for(db)
        stmt = insert(Vendor).values(
            vendor_id=vendor.vendor_id, name=vendor.name, category=vendor.category
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Vendor.vendor_id],
            set_={
                "name": stmt.excluded.name,
                "category": stmt.excluded.category,
                "updated_at": func.now(),
            },
        )
        await db.execute(stmt)

    @staticmethod
    async def upsert_customer(db: AsyncSession, customer: CustomerRecord) -> None:
        insert = SeedService._insert_for(db)
        stmt = insert(Customer).values(
            customer_id=customer.customer_id, name=customer.name, email=customer.email
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Customer.customer_id],
            set_={
                "name": stmt.excluded.name,
                "email": stmt.excluded.email,
                "updated_at": func.now(),
            },
        )
        await db.execute(stmt)

    @staticmethod
    def build_invoice(record: InvoiceRecord) -> Invoice:
        """Invoice with nested line items and payments, linked by business keys."""
        return Invoice(
            invoice_id=record.invoice_id,
            vendor_id=record.vendor.vendor_id,
            customer_id=record.customer.customer_id,
            invoice_date=record.invoice_date,
            due_date=record.due_date,
            total_amount=record.total_amount,
            status=record.status,
            line_items=[
                LineItem(
                    item_id=item.item_id,
                    description=item.description,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total=item.total,
                )
                for item in record.line_items
            ],
            payments=[
                Payment(
                    payment_id=payment.payment_id,
                    payment_date=payment.payment_date,
                    amount=payment.amount,
                    method=payment.method,
                )
                for payment in record.payments
            ],
        )

    @staticmethod
    async def seed(database: Database, records: List[InvoiceRecord]) -> SeedReport:
        """
        Replace the database contents with `records`.

        Raises:
            SeedError: If any delete, upsert or insert fails
        """
        report = SeedReport()
        vendors, customers = SeedService.dedupe_parties(records)

        try:
            async with database.session() as db:
                await SeedService.clear(db)
                await db.commit()
                logger.info("Cleared existing data")

                logger.info(f"Creating {len(vendors)} vendors and {len(customers)} customers...")
                for vendor in vendors.values():
                    await SeedService.upsert_vendor(db, vendor)
                for customer in customers.values():
                    await SeedService.upsert_customer(db, customer)
                await db.commit()
                report.vendors = len(vendors)
                report.customers = len(customers)

                logger.info(f"Creating {len(records)} invoices...")
                for record in records:
                    for warning in SeedService.check_totals(record):
                        logger.warning(warning)
                        report.warnings.append(warning)

                    db.add(SeedService.build_invoice(record))
                    await db.commit()

                    report.invoices += 1
                    report.line_items += len(record.line_items)
                    report.payments += len(record.payments)
                    logger.info(f"  Created invoice {record.invoice_id}")
        except SeedError:
            raise
        except Exception as e:
            raise SeedError(f"Seeding failed after {report.invoices} invoices: {e}") from e

        logger.info(
            f"Seeding completed: {report.vendors} vendors, {report.customers} customers, "
            f"{report.invoices} invoices, {report.line_items} line items, {report.payments} payments"
        )
        return report

    @staticmethod
    async def seed_file(database: Database, path: Union[str, Path]) -> SeedReport:
        """Load `path` and seed the database from it."""
        logger.info(f"Seeding database from {path}...")
        records = SeedService.load_records(path)
        return await SeedService.seed(database, records)
