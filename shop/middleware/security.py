"""
Security Headers Middleware and request hygiene helpers.

- Security headers on every response (CSP, HSTS in production, ...)
- HTML-escaping of user-supplied strings
- Blocking loopback/private client addresses in production
"""

import re
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_ESCAPE_MAP = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}
_ESCAPE_RE = re.compile(r"[&<>\"']")

BLOCKED_IPS: frozenset = frozenset()

BLOCKED_IP_PATTERNS = (
    re.compile(r"^127\.0\.0\.1$"),
    re.compile(r"^192\.168\."),
    re.compile(r"^10\."),
)


def sanitize_input(value: Any) -> Any:
    """
    Escape HTML-significant characters and trim strings, recursing into
    lists and dicts. Other values are returned unchanged.
    """
    if isinstance(value, str):
        return _ESCAPE_RE.sub(lambda m: _ESCAPE_MAP[m.group(0)], value).strip()
    if isinstance(value, list):
        return [sanitize_input(item) for item in value]
    if isinstance(value, dict):
        return {key: sanitize_input(item) for key, item in value.items()}
    return value


def validate_ip(client_ip: str | None, production: bool) -> bool:
    """Return False for blocked client addresses (production only)."""
    if not production or not client_ip:
        return True
    # X-Forwarded-For may carry a chain; the first hop is the client
    ip = client_ip.split(",")[0].strip()
    if ip in BLOCKED_IPS:
        return False
    return not any(pattern.match(ip) for pattern in BLOCKED_IP_PATTERNS)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    def __init__(self, app: Any, production: bool = False) -> None:
        super().__init__(app)
        self.production = production

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self'; "
            "style-src 'self'; "
            "img-src 'self' data: https:; "
            "font-src 'self' data:; "
            "connect-src 'self'; "
            "frame-ancestors 'none';"
        )

        # Max-age: 31536000 = 1 year in seconds
        if self.production:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains; preload"
            )

        if "X-Powered-By" in response.headers:
            del response.headers["X-Powered-By"]

        return response
