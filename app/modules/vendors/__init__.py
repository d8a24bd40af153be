"""Vendors module"""

from .models import Vendor

__all__ = ["Vendor"]
