"""
Chat Router - natural-language questions over the invoice data.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.config import Config
from app.core.nlsql import NlSqlClient
from .service import ChatService
from .schemas import ChatQueryDto

router = APIRouter(tags=["chat"])


def get_nlsql_client(request: Request) -> NlSqlClient:
    """Build the upstream client from the app's settings."""
    settings: Config = request.app.state.config
    return NlSqlClient(
        base_url=settings.vanna_api_base_url,
        api_key=settings.vanna_api_key,
        timeout_s=settings.vanna_timeout_seconds,
    )


@router.post("/chat-with-data")
async def chat_with_data(
    dto: ChatQueryDto,
    client: NlSqlClient = Depends(get_nlsql_client),
):
    """
    Ask a question in plain language.

    The question is sent to the NL-to-SQL service, which answers with the
    generated SQL and its results:
    {"query": "<sql>", "results": [...], "error": "..."}
    That body is returned as-is.
    """
    data = await ChatService.ask(client, dto)
    return JSONResponse(content=data)
