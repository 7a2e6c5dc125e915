"""Rate Limiting Middleware for FastAPI.

Fixed one-minute window per client IP and path, counted in Upstash Redis
when a client is given and in process memory otherwise.
"""

import time
from collections.abc import Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from shop.db import RedisKeys, TTL
from shop.errors import ERROR_ACCESS_DENIED, ERROR_RATE_LIMITED
from shop.logging import get_logger
from .security import validate_ip

logger = get_logger(__name__)


def get_client_ip(request: Request) -> str:
    """Client address, preferring the first X-Forwarded-For hop."""
    if forwarded_for := request.headers.get("X-Forwarded-For"):
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting middleware using Upstash Redis.

    Limits requests per IP address per endpoint under path_prefix. In
    production, loopback and private addresses are refused outright.
    """

    def __init__(
        self,
        app: Any,
        requests_per_minute: int = 100,
        redis_client: Any = None,
        path_prefix: str = "/api/shop",
        production: bool = False,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.redis_client = redis_client
        self.path_prefix = path_prefix
        self.production = production
        self._cache: dict[str, list[float]] = {}  # Fallback in-memory cache
        self._last_sweep = 0.0

    async def dispatch(self, request: Request, call_next: Callable[..., Any]) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)  # type: ignore[no-any-return]

        client_ip = get_client_ip(request)

        if not validate_ip(client_ip, self.production):
            return JSONResponse(
                status_code=403,
                content={"success": False, "error": ERROR_ACCESS_DENIED, "code": "ACCESS_DENIED"},
            )

        key = RedisKeys.rate_limit_key(client_ip, request.url.path)

        if await self._is_rate_limited(key):
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={"success": False, "error": ERROR_RATE_LIMITED, "code": "RATE_LIMIT_EXCEEDED"},
                headers={"Retry-After": str(TTL.RATE_LIMIT_WINDOW)},
            )

        await self._record_request(key)

        return await call_next(request)  # type: ignore[no-any-return]

    async def _is_rate_limited(self, key: str) -> bool:
        """Check if key is rate limited."""
        if self.redis_client:
            try:
                current = await self.redis_client.get(key)
                if current:
                    return int(current) >= self.requests_per_minute
                return False
            except Exception as e:
                logger.warning(f"Redis rate limit check failed: {e}, falling back to in-memory")

        now = time.time()
        return len(self._recent_hits(key, now)) >= self.requests_per_minute

    async def _record_request(self, key: str) -> None:
        """Record a request for rate limiting."""
        if self.redis_client:
            try:
                count = await self.redis_client.incr(key)
                if count == 1:
                    # First hit opens the window
                    await self.redis_client.expire(key, TTL.RATE_LIMIT_WINDOW)
                return
            except Exception as e:
                logger.warning(f"Redis rate limit record failed: {e}, falling back to in-memory")

        now = time.time()
        self._sweep(now)
        hits = self._recent_hits(key, now)
        hits.append(now)
        self._cache[key] = hits

    def _recent_hits(self, key: str, now: float) -> list[float]:
        """Hits for key inside the current window; keys with none are dropped."""
        hits = [t for t in self._cache.get(key, ()) if now - t < TTL.RATE_LIMIT_WINDOW]
        if hits:
            self._cache[key] = hits
        else:
            self._cache.pop(key, None)
        return hits

    def _sweep(self, now: float) -> None:
        """Once per window, drop clients that have gone quiet."""
        if now - self._last_sweep < TTL.RATE_LIMIT_WINDOW:
            return
        self._last_sweep = now
        for key in list(self._cache):
            self._recent_hits(key, now)
