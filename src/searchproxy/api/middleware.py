"""HTTP middleware — per-client rate limiting and protective response headers."""

from __future__ import annotations

import logging
import math
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: float = 0.0


class SlidingWindowRateLimiter:
    """Counts requests per key over a rolling time window.

    Each key keeps the timestamps of its requests inside the current window.
    Keys with no recent requests are swept once per window.

    Args:
        max_requests: Requests allowed per key within one window.
        window_seconds: Window length in seconds.
        clock: Monotonic time source.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def hit(self, key: str) -> RateLimitDecision:
        """Record a request for *key* unless it is over the limit."""
        now = self._clock()
        cutoff = now - self.window_seconds
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(cutoff)
            self._last_sweep = now

        hits = self._hits.setdefault(key, deque())
        while hits and hits[0] <= cutoff:
            hits.popleft()

        if len(hits) >= self.max_requests:
            retry_after = hits[0] + self.window_seconds - now
            return RateLimitDecision(False, self.max_requests, 0, max(retry_after, 0.0))

        hits.append(now)
        return RateLimitDecision(True, self.max_requests, self.max_requests - len(hits))

    def _sweep(self, cutoff: float) -> None:
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects clients that exceed the request budget with HTTP 429.

    Only paths starting with ``path_prefix`` are counted. Clients are keyed
    by remote address.
    """

    def __init__(self, app: ASGIApp, limiter: SlidingWindowRateLimiter, path_prefix: str = "/api/") -> None:
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        decision = self.limiter.hit(client)
        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s on %s", client, request.url.path)
            return JSONResponse(
                status_code=429,
                content={"error": RATE_LIMIT_MESSAGE},
                headers={
                    "Retry-After": str(math.ceil(decision.retry_after)),
                    "RateLimit-Limit": str(decision.limit),
                    "RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(decision.limit)
        response.headers["RateLimit-Remaining"] = str(decision.remaining)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds ``SECURITY_HEADERS`` to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
