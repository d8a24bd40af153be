"""
ChatService - pass-through to the external NL-to-SQL service.
"""

import logging
from typing import Any

from app.core.exceptions import BadRequestError, UpstreamServiceError
from app.core.nlsql import NlSqlClient, NlSqlError
from .schemas import ChatQueryDto

logger = logging.getLogger(__name__)


class ChatService:
    @staticmethod
    async def ask(client: NlSqlClient, dto: ChatQueryDto) -> Any:
        """
        Forward the question and return the upstream JSON unchanged.

        Raises:
            BadRequestError: If the query is missing or blank (no upstream call is made)
            UpstreamServiceError: If the service is unreachable or answers non-2xx
        """
        if not dto.query or not dto.query.strip():
            raise BadRequestError("Query is required")

        try:
            return await client.query(dto.query)
        except NlSqlError as e:
            logger.error(f"Error in chat-with-data: {e}")
            raise UpstreamServiceError("Failed to process query", str(e)) from e
