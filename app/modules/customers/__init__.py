"""Customers module"""

from .models import Customer

__all__ = ["Customer"]
