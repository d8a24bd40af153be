from typing import List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Config
from app.core.db.engine import Database
from app.main import create_app
from app.modules.seeder.schemas import InvoiceRecordList
from app.modules.seeder.service import SeedService


def invoice_record(
    invoice_id: str,
    *,
    vendor: tuple = ("V1", "Acme", "Office"),
    customer: tuple = ("C1", "Jane Doe", "jane@example.com"),
    invoice_date: str = "2024-03-15",
    due_date: str = "2024-04-14",
    total_amount: float = 150.0,
    status: str = "pending",
    line_items: Optional[List[dict]] = None,
    payments: Optional[List[dict]] = None,
) -> dict:
    """One record in the seed file layout."""
    vendor_id, vendor_name, category = vendor
    customer_id, customer_name, email = customer
    return {
        "invoice_id": invoice_id,
        "vendor": {"vendor_id": vendor_id, "name": vendor_name, "category": category},
        "customer": {"customer_id": customer_id, "name": customer_name, "email": email},
        "invoice_date": invoice_date,
        "due_date": due_date,
        "total_amount": total_amount,
        "status": status,
        "line_items": line_items or [],
        "payments": payments or [],
    }


def scenario_records() -> List[dict]:
    """INV-001 (pending, one line item, one payment) and INV-002 (paid), both from vendor V1."""
    return [
        invoice_record(
            "INV-001",
            line_items=[
                {
                    "item_id": "INV-001-L1",
                    "description": "Printer paper",
                    "quantity": 3,
                    "unit_price": 50.0,
                    "total": 150.0,
                }
            ],
            payments=[
                {
                    "payment_id": "PAY-001",
                    "payment_date": "2024-03-20",
                    "amount": 50.0,
                    "method": "bank_transfer",
                }
            ],
        ),
        invoice_record(
            "INV-002",
            customer=("C2", "John Roe", "john@example.com"),
            invoice_date="2024-06-01",
            due_date="2024-07-01",
            total_amount=300.0,
            status="paid",
        ),
    ]


@pytest.fixture
async def database():
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def seed(database):
    async def _seed(records: List[dict]):
        return await SeedService.seed(database, InvoiceRecordList.validate_python(records))

    return _seed


@pytest.fixture
def settings() -> Config:
    return Config(
        rate_limit_enabled=False,
        vanna_api_base_url="http://vanna.test",
        vanna_api_key="",
    )


@pytest.fixture
def app(settings, database):
    return create_app(settings=settings, database=database)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
