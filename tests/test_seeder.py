import json
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import delete, func, select

from app.modules.customers.models import Customer
from app.modules.invoices.models import Invoice, LineItem, Payment
from app.modules.seeder.cli import main as seed_main
from app.modules.seeder.schemas import InvoiceRecordList
from app.modules.seeder.service import SeedError, SeedService
from app.modules.vendors.models import Vendor
from conftest import invoice_record, scenario_records


async def _count(database, model) -> int:
    async with database.session() as session:
        return (await session.execute(select(func.count(model.id)))).scalar()


def test_load_records_parses_dates_and_amounts(tmp_path):
    path = tmp_path / "data.json"
    record = invoice_record("INV-1", invoice_date="2024-03-15T00:00:00.000Z")
    path.write_text(json.dumps([record]))

    records = SeedService.load_records(path)

    assert len(records) == 1
    assert records[0].invoice_date == date(2024, 3, 15)
    assert records[0].total_amount == Decimal("150.0")


def test_load_records_missing_file(tmp_path):
    with pytest.raises(SeedError, match="Cannot read seed file"):
        SeedService.load_records(tmp_path / "missing.json")


def test_load_records_malformed_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('[{"invoice_id": ')

    with pytest.raises(SeedError, match="Malformed JSON"):
        SeedService.load_records(path)


def test_load_records_rejects_invalid_records(tmp_path):
    path = tmp_path / "invalid.json"
    path.write_text(json.dumps([invoice_record("INV-1", status="cancelled")]))

    with pytest.raises(SeedError, match="Invalid invoice records"):
        SeedService.load_records(path)


def test_dedupe_parties_last_record_wins():
    records = [
        invoice_record("INV-1", vendor=("V1", "Acme", "Office")),
        invoice_record("INV-2", vendor=("V1", "Acme Corp", "Supplies"), customer=("C1", "Jane D.", "jd@example.com")),
    ]

    vendors, customers = SeedService.dedupe_parties(InvoiceRecordList.validate_python(records))

    assert list(vendors) == ["V1"]
    assert vendors["V1"].name == "Acme Corp"
    assert vendors["V1"].category == "Supplies"
    assert customers["C1"].email == "jd@example.com"


async def test_seed_writes_each_business_key_once(database, seed):
    records = [
        invoice_record("INV-1", vendor=("V1", "Acme", "Office")),
        invoice_record("INV-2", vendor=("V2", "Globex", "IT")),
        invoice_record("INV-3", vendor=("V1", "Acme Corp", "Supplies"), customer=("C2", "John", "john@example.com")),
    ]

    report = await seed(records)

    assert report.vendors == 2
    assert report.customers == 2
    assert report.invoices == 3
    async with database.session() as session:
        vendors = (await session.execute(select(Vendor).order_by(Vendor.vendor_id))).scalars().all()
    assert [v.vendor_id for v in vendors] == ["V1", "V2"]
    assert (vendors[0].name, vendors[0].category) == ("Acme Corp", "Supplies")


async def test_seed_creates_nested_line_items_and_payments(database, seed):
    await seed(scenario_records())

    assert await _count(database, Invoice) == 2
    assert await _count(database, LineItem) == 1
    assert await _count(database, Payment) == 1


async def test_reseeding_replaces_previous_data(database, seed):
    await seed(scenario_records())
    await seed([invoice_record("INV-9", vendor=("V9", "Initech", "Consulting"))])

    assert await _count(database, Invoice) == 1
    assert await _count(database, Vendor) == 1
    assert await _count(database, Customer) == 1
    assert await _count(database, LineItem) == 0
    assert await _count(database, Payment) == 0


async def test_seed_is_repeatable(database, seed):
    await seed(scenario_records())
    await seed(scenario_records())

    assert await _count(database, Invoice) == 2
    assert await _count(database, Vendor) == 1
    assert await _count(database, Customer) == 2


async def test_seed_reports_inconsistent_totals_but_stores_them(database, seed):
    record = invoice_record(
        "INV-1",
        total_amount=200.0,
        line_items=[{"item_id": "L1", "description": "Desk", "quantity": 2, "unit_price": 40.0, "total": 90.0}],
    )

    report = await seed([record])

    assert len(report.warnings) == 2
    async with database.session() as session:
        invoice = (await session.execute(select(Invoice))).scalar_one()
    assert invoice.total_amount == Decimal("200.00")


async def test_seed_fails_on_duplicate_invoice_ids(seed):
    with pytest.raises(SeedError, match="Seeding failed after 1 invoices"):
        await seed([invoice_record("INV-1"), invoice_record("INV-1")])


async def test_deleting_vendor_cascades_to_invoices_items_and_payments(database, seed):
    await seed(
        scenario_records()
        + [invoice_record("INV-3", vendor=("V2", "Globex", "IT"), customer=("C3", "Ann", "ann@example.com"))]
    )

    async with database.session() as session:
        await session.execute(delete(Vendor).where(Vendor.vendor_id == "V1"))

    async with database.session() as session:
        remaining = (await session.execute(select(Invoice.invoice_id))).scalars().all()
    assert remaining == ["INV-3"]
    assert await _count(database, LineItem) == 0
    assert await _count(database, Payment) == 0


async def test_deleting_customer_cascades_to_invoices(database, seed):
    await seed(scenario_records())

    async with database.session() as session:
        await session.execute(delete(Customer).where(Customer.customer_id == "C1"))

    async with database.session() as session:
        remaining = (await session.execute(select(Invoice.invoice_id))).scalars().all()
    assert remaining == ["INV-002"]
    assert await _count(database, LineItem) == 0


def test_cli_exits_nonzero_on_missing_file(tmp_path):
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"

    assert seed_main([str(tmp_path / "missing.json"), "--database-url", db_url]) == 1


def test_cli_seeds_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(scenario_records()))
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"

    assert seed_main([str(path), "--database-url", db_url, "--create-tables"]) == 0
