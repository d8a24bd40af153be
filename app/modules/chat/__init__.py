"""Chat-with-data module"""

from .service import ChatService
from .router import router, get_nlsql_client

__all__ = ["ChatService", "router", "get_nlsql_client"]
