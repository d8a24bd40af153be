"""Analytics module"""

from .service import AnalyticsService
from .router import router

__all__ = ["AnalyticsService", "router"]
