"""
Fixed-window rate limiting middleware.

Counts requests per client address in windows of `window_seconds`.
Only paths under the configured prefix (default `/api/`) are limited;
health checks and documentation are never throttled.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


@dataclass
class _Window:
    started_at: float
    count: int = 0


class FixedWindowRateLimiter(BaseHTTPMiddleware):
    """
    Middleware that rejects requests with 429 once a client has made
    `max_requests` requests in the current window:
    {
        "error": "Too many requests, please try again later."
    }

    Responses carry `X-RateLimit-Limit` / `X-RateLimit-Remaining`, and
    rejected ones a `Retry-After` header (seconds until the window resets).
    """

    def __init__(
        self,
        app: ASGIApp,
        max_requests: int = 100,
        window_seconds: int = 15 * 60,
        path_prefix: str = "/api/",
        clock: Optional[Callable[[], float]] = None,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.clock = clock or time.monotonic
        self._windows: Dict[str, _Window] = {}
        self._last_sweep = self.clock()

    def _client_key(self, request: Request) -> str:
        return request.client.host if request.client else "unknown"

    def _sweep(self, now: float) -> None:
        """Forget clients whose window has expired, at most once per window."""
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [
            key
            for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]

    def _hit(self, key: str) -> _Window:
        now = self.clock()
        self._sweep(now)
        window = self._windows.get(key)
        if window is None or now - window.started_at >= self.window_seconds:
            window = _Window(started_at=now)
            self._windows[key] = window
        window.count += 1
        return window

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        window = self._hit(self._client_key(request))
        remaining = max(self.max_requests - window.count, 0)
        headers = {
            "X-RateLimit-Limit": str(self.max_requests),
            "X-RateLimit-Remaining": str(remaining),
        }

        if window.count > self.max_requests:
            reset_in = self.window_seconds - (self.clock() - window.started_at)
            headers["Retry-After"] = str(max(int(reset_in), 1))
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": "Too many requests, please try again later."},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
