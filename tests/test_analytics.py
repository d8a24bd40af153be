from datetime import date

import pytest

from app.modules.analytics.service import AnalyticsService
from conftest import invoice_record


@pytest.fixture
async def two_year_data(seed):
    """Invoices spread over 2024 and 2025 from three vendors in two categories."""
    await seed(
        [
            invoice_record("INV-1", invoice_date="2024-11-03", due_date="2024-12-03", total_amount=100.0, status="paid"),
            invoice_record("INV-2", invoice_date="2024-11-20", due_date="2024-12-20", total_amount=50.0, status="pending"),
            invoice_record(
                "INV-3",
                vendor=("V2", "Globex", "IT"),
                invoice_date="2025-01-10",
                due_date="2025-02-09",
                total_amount=200.0,
                status="pending",
            ),
            invoice_record(
                "INV-4",
                vendor=("V3", "Initech", "IT"),
                invoice_date="2025-02-14",
                due_date="2025-02-28",
                total_amount=25.5,
                status="overdue",
            ),
            invoice_record(
                "INV-5",
                vendor=("V2", "Globex", "IT"),
                invoice_date="2025-02-01",
                due_date="2025-03-03",
                total_amount=74.5,
                status="pending",
            ),
        ]
    )


async def test_stats_counts_only_current_year_for_ytd(database, two_year_data):
    async with database.session() as session:
        stats = await AnalyticsService.get_stats(session, today=date(2025, 6, 30))

    assert stats.total_spend_ytd == 300.0
    assert stats.total_invoices_processed == 3
    assert stats.documents_uploaded == 5
    assert stats.average_invoice_value == pytest.approx(90.0)


async def test_stats_on_empty_database(database):
    async with database.session() as session:
        stats = await AnalyticsService.get_stats(session, today=date(2025, 1, 1))

    assert stats.total_spend_ytd == 0
    assert stats.total_invoices_processed == 0
    assert stats.documents_uploaded == 0
    assert stats.average_invoice_value == 0


async def test_invoice_trends_partition_all_invoices(database, two_year_data):
    async with database.session() as session:
        trends = await AnalyticsService.get_invoice_trends(session)

    assert [t.month for t in trends] == ["2024-11", "2025-01", "2025-02"]
    assert [t.invoice_count for t in trends] == [2, 1, 2]
    assert sum(t.invoice_count for t in trends) == 5
    assert sum(t.total_spend for t in trends) == pytest.approx(450.0)


async def test_top_vendors_sorted_by_spend(database, two_year_data):
    async with database.session() as session:
        vendors = await AnalyticsService.get_top_vendors(session)

    assert [(v.vendor_id, v.total_spend) for v in vendors] == [
        ("V2", 274.5),
        ("V1", 150.0),
        ("V3", 25.5),
    ]
    assert vendors[0].name == "Globex"
    assert vendors[0].category == "IT"


async def test_top_vendors_truncates_to_ten(database, seed):
    await seed(
        [
            invoice_record(f"INV-{n}", vendor=(f"V{n}", f"Vendor {n}", "Misc"), total_amount=float(n * 10))
            for n in range(1, 13)
        ]
    )

    async with database.session() as session:
        vendors = await AnalyticsService.get_top_vendors(session)

    spends = [v.total_spend for v in vendors]
    assert len(vendors) == 10
    assert spends == sorted(spends, reverse=True)
    assert vendors[0].vendor_id == "V12"


async def test_top_vendors_ties_keep_creation_order(database, seed):
    await seed(
        [
            invoice_record("INV-1", vendor=("VB", "Beta", "Misc"), total_amount=10.0),
            invoice_record("INV-2", vendor=("VA", "Alpha", "Misc"), total_amount=10.0),
        ]
    )

    async with database.session() as session:
        vendors = await AnalyticsService.get_top_vendors(session)

    assert [v.vendor_id for v in vendors] == ["VB", "VA"]


async def test_category_spend(database, two_year_data):
    async with database.session() as session:
        categories = await AnalyticsService.get_category_spend(session)

    assert [(c.category, c.spend) for c in categories] == [("IT", 300.0), ("Office", 150.0)]


async def test_cash_outflow_only_pending_by_due_month(database, two_year_data):
    async with database.session() as session:
        outflow = await AnalyticsService.get_cash_outflow(session)

    assert [(o.month, o.amount) for o in outflow] == [
        ("2024-12", 50.0),
        ("2025-02", 200.0),
        ("2025-03", 74.5),
    ]


async def test_dashboard_endpoints_use_camel_case(client, two_year_data):
    trends = (await client.get("/api/invoice-trends")).json()
    top = (await client.get("/api/vendors/top10")).json()
    categories = (await client.get("/api/category-spend")).json()
    outflow = (await client.get("/api/cash-outflow")).json()
    stats = (await client.get("/api/stats")).json()

    assert trends[0] == {"month": "2024-11", "invoiceCount": 2, "totalSpend": 150.0}
    assert top[0] == {"vendorId": "V2", "name": "Globex", "category": "IT", "totalSpend": 274.5}
    assert categories[1] == {"category": "Office", "spend": 150.0}
    assert outflow[0] == {"month": "2024-12", "amount": 50.0}
    assert set(stats) == {"totalSpendYTD", "totalInvoicesProcessed", "documentsUploaded", "averageInvoiceValue"}
    assert stats["documentsUploaded"] == 5


async def test_average_invoice_value_is_not_rounded(database, seed):
    await seed(
        [
            invoice_record("INV-1", total_amount=100.0),
            invoice_record("INV-2", total_amount=100.0),
            invoice_record("INV-3", total_amount=100.01),
        ]
    )

    async with database.session() as session:
        stats = await AnalyticsService.get_stats(session, today=date(2024, 6, 1))

    assert stats.average_invoice_value == pytest.approx(300.01 / 3)
    assert stats.average_invoice_value != round(300.01 / 3, 2)
    assert stats.total_spend_ytd == 300.01
