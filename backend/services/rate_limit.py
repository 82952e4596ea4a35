"""In-memory fixed-window rate limiting, keyed by client address.

Emitted headers:
    X-RateLimit-Limit, X-RateLimit-Remaining, X-RateLimit-Reset, Retry-After (on 429)
"""

import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from starlette import status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


@dataclass
class RateWindow:
    window_start: float
    count: int


@dataclass
class RateDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class RateLimiter:
    """Counts hits per key over a fixed window; the window restarts once elapsed."""

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, RateWindow] = {}
        self._last_sweep = clock()

    def _sweep(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if now - w.window_start >= self.window_seconds]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now

    def hit(self, key: str) -> RateDecision:
        now = self._clock()
        # Drop expired windows at most once per window length
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)

        window = self._windows.get(key)
        if window is None or now - window.window_start >= self.window_seconds:
            window = RateWindow(window_start=now, count=0)
            self._windows[key] = window

        window.count += 1
        reset_after = window.window_start + self.window_seconds - now
        return RateDecision(
            allowed=window.count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - window.count),
            reset_after=reset_after,
        )

    def reset(self) -> None:
        self._windows.clear()

    def __len__(self) -> int:
        return len(self._windows)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests with 429 once a client exceeds its window quota."""

    def __init__(self, app: ASGIApp, limiter: RateLimiter) -> None:
        super().__init__(app)
        self.limiter = limiter

    @staticmethod
    def _client_key(request: Request) -> str:
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        decision = self.limiter.hit(self._client_key(request))
        reset = str(max(0, math.ceil(decision.reset_after)))
        headers = {
            "X-RateLimit-Limit": str(decision.limit),
            "X-RateLimit-Remaining": str(decision.remaining),
            "X-RateLimit-Reset": reset,
        }

        if not decision.allowed:
            limited = JSONResponse(
                {"error": RATE_LIMIT_MESSAGE},
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            )
            limited.headers.update({**headers, "Retry-After": reset})
            return limited

        response = await call_next(request)
        response.headers.update(headers)
        return response
