"""
Anti-forgery (CSRF) tokens and middleware.

Tokens are "<salt>-<signature>" where the signature is an HMAC-SHA256 of the
salt keyed by CSRF_SECRET. Each token is freshly salted, so every mutating
request can carry a new one; any token signed with the current secret
verifies.
"""

import base64
import hashlib
import hmac
import os
import secrets
from typing import Any, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from shop.errors import (
    ERROR_CSRF_SECRET_MISSING,
    ERROR_CSRF_TOKEN_INVALID,
    ERROR_CSRF_TOKEN_MISSING,
    ERROR_SERVER_CONFIG,
    SecurityConfigurationError,
)
from shop.logging import get_logger

logger = get_logger(__name__)

CSRF_HEADER = "X-CSRF-Token"
SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
SALT_BYTES = 8


class CSRFTokens:
    """Create and verify salted HMAC tokens."""

    @staticmethod
    def _sign(secret: str, salt: str) -> str:
        digest = hmac.new(secret.encode(), salt.encode(), hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).rstrip(b"=").decode()

    def create(self, secret: str) -> str:
        salt = secrets.token_hex(SALT_BYTES)
        return f"{salt}-{self._sign(secret, salt)}"

    def verify(self, secret: str, token: Optional[str]) -> bool:
        if not token or not isinstance(token, str) or not token.isascii():
            return False
        salt, sep, signature = token.partition("-")
        if not sep or not salt or not signature:
            return False
        return hmac.compare_digest(self._sign(secret, salt), signature)


_tokens = CSRFTokens()


def _resolve_secret(secret: Optional[str]) -> str:
    csrf_secret = secret or os.environ.get("CSRF_SECRET", "")
    if not csrf_secret:
        raise SecurityConfigurationError(ERROR_CSRF_SECRET_MISSING)
    return csrf_secret


def generate_csrf_token(secret: Optional[str] = None) -> str:
    """
    Generate a fresh CSRF token.

    Args:
        secret: Signing secret; defaults to the CSRF_SECRET environment variable

    Raises:
        SecurityConfigurationError: no secret is configured
    """
    return _tokens.create(_resolve_secret(secret))


def verify_csrf_token(token: Optional[str], secret: Optional[str] = None) -> bool:
    """Check a token against the configured secret."""
    return _tokens.verify(_resolve_secret(secret), token)


def _error(status_code: int, error: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "code": code},
    )


class CSRFMiddleware(BaseHTTPMiddleware):
    """
    Reject state-changing requests without a valid X-CSRF-Token header.

    A missing secret is reported as a server configuration error (500) on
    every request, including safe ones, so a misconfigured deployment is
    visible immediately.
    """

    def __init__(self, app: Any, secret: Optional[str] = None, path_prefix: str = "/api/shop") -> None:
        super().__init__(app)
        self.secret = secret
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        try:
            secret = _resolve_secret(self.secret)
        except SecurityConfigurationError:
            logger.error("CSRF_SECRET environment variable is required")
            return _error(500, ERROR_SERVER_CONFIG, "CSRF_SECRET_MISSING")

        if request.method in SAFE_METHODS:
            return await call_next(request)

        token = request.headers.get(CSRF_HEADER)
        if not token:
            return _error(403, ERROR_CSRF_TOKEN_MISSING, "CSRF_TOKEN_MISSING")

        if not _tokens.verify(secret, token):
            logger.warning(f"Invalid CSRF token on {request.method} {request.url.path}")
            return _error(403, ERROR_CSRF_TOKEN_INVALID, "CSRF_TOKEN_INVALID")

        return await call_next(request)
