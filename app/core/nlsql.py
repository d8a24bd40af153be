"""
NL-to-SQL (Vanna) HTTP client.

Used endpoint:
- POST /query  {"query": "..."}  -> {"query": "<sql>", "results": [...], "error"?: "..."}

The response body is relayed verbatim; this client only checks transport
errors and the status code.
"""

from __future__ import annotations

from typing import Any

import httpx


# Upstream failures are explicit and separable from other runtime errors.
class NlSqlError(RuntimeError):
    pass


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise NlSqlError("VANNA_API_BASE_URL is empty.")
    return base_url.rstrip("/")


class NlSqlClient:
    def __init__(
        self,
        *,
        base_url: str,
        api_key: str | None = None,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.api_key = (api_key or "").strip() or None
        self.timeout_s = timeout_s
        # Injected in tests (httpx.MockTransport); None means real network.
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def query(self, question: str) -> Any:
        """
        Ask the upstream service to translate `question` into SQL and run it.
        """
        base_url = _normalize_base_url(self.base_url)

        try:
            async with httpx.AsyncClient(
                base_url=base_url, timeout=self.timeout_s, transport=self.transport
            ) as client:
                resp = await client.post(
                    "/query", json={"query": question}, headers=self._headers()
                )
        except httpx.HTTPError as e:
            raise NlSqlError(f"Vanna API unreachable: {e}") from e

        if not resp.is_success:
            raise NlSqlError(f"Vanna API error: {resp.reason_phrase or resp.status_code}")

        try:
            return resp.json()
        except ValueError as e:
            raise NlSqlError("Vanna API returned a non-JSON response.") from e
