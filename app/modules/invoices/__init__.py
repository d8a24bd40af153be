"""Invoices module"""

from .models import Invoice, InvoiceStatus, LineItem, Payment
from .service import InvoicesService
from .router import router

__all__ = ["Invoice", "InvoiceStatus", "LineItem", "Payment", "InvoicesService", "router"]
