# Import all models here to ensure they're loaded together
# This prevents circular import issues with relationships

from app.core.db.base import Base
from app.modules.vendors.models import Vendor
from app.modules.customers.models import Customer
from app.modules.invoices.models import Invoice, InvoiceStatus, LineItem, Payment

# Export for easy importing
__all__ = [
    "Base",
    "Vendor",
    "Customer",
    "Invoice",
    "InvoiceStatus",
    "LineItem",
    "Payment",
]
