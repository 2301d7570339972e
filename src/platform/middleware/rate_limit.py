"""
Per-client request throttling (fixed window, in process)

    key = user:{X-User-Id} | ip:{client}  +  METHOD:path
    first hit of a key opens a window of `window_seconds`
    hits past `max_requests` inside the window -> 429 + Retry-After

Counters live in this process only; every replica throttles on its own.
"""

import math
import time
from collections.abc import Callable, Collection

import attrs
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.platform.constant.route_constant import USER_ID_HEADER
from src.platform.exception.exception_handlers import custom_error_handler
from src.platform.exception.exceptions import RateLimitExceededError
from src.platform.logging.loguru_io import Logger


@attrs.define
class _Window:
    count: int
    reset_at: float


@attrs.frozen
class RateLimitDecision:
    allowed: bool
    retry_after: int = 0


class FixedWindowRateLimiter:
    def __init__(
        self,
        *,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError('max_requests must be at least 1')
        if window_seconds <= 0:
            raise ValueError('window_seconds must be positive')

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._last_sweep = clock()

    def hit(self, key: str) -> RateLimitDecision:
        """Count one request for `key`. No await inside, so it is atomic on the event loop."""
        now = self._clock()
        self._sweep(now)

        window = self._windows.get(key)
        if window is None or now >= window.reset_at:
            self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
            return RateLimitDecision(allowed=True)

        if window.count >= self.max_requests:
            return RateLimitDecision(
                allowed=False, retry_after=max(1, math.ceil(window.reset_at - now))
            )

        window.count += 1
        return RateLimitDecision(allowed=True)

    def reset(self, key: str) -> None:
        self._windows.pop(key, None)

    @property
    def tracked_keys(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float) -> None:
        # Drop expired windows at most once per window length
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [key for key, window in self._windows.items() if window.reset_at <= now]
        for key in expired:
            del self._windows[key]


def client_key(request: Request) -> str:
    endpoint = f'{request.method}:{request.url.path}'

    user_id = request.headers.get(USER_ID_HEADER)
    if user_id:
        return f'user:{user_id}:{endpoint}'

    forwarded_for = request.headers.get('x-forwarded-for')
    if forwarded_for:
        ip = forwarded_for.split(',')[0].strip()
    else:
        ip = request.client.host if request.client else 'unknown'
    return f'ip:{ip}:{endpoint}'


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        limiter: FixedWindowRateLimiter,
        exempt_paths: Collection[str] = ('/health', '/metrics'),
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        key = client_key(request)
        decision = self.limiter.hit(key)
        if decision.allowed:
            return await call_next(request)

        Logger.base.warning(
            f'🚦 [RATE-LIMIT] {key} exceeded {self.limiter.max_requests} requests '
            f'per {self.limiter.window_seconds}s, retry after {decision.retry_after}s'
        )
        response = await custom_error_handler(
            request, RateLimitExceededError('Too many requests. Please try again later.')
        )
        response.headers['Retry-After'] = str(decision.retry_after)
        return response
