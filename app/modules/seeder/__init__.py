"""Seeder module"""

from .service import SeedError, SeedService
from .schemas import InvoiceRecord, SeedReport

__all__ = ["SeedError", "SeedService", "InvoiceRecord", "SeedReport"]
