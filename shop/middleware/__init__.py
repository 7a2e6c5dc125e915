"""Security middleware: headers, rate limiting and CSRF protection."""
from typing import Optional

from fastapi import FastAPI

from shop.config import ShopConfig, get_shop_config
from shop.db import get_redis
from shop.logging import get_logger
from .csrf import CSRFMiddleware, CSRFTokens, generate_csrf_token, verify_csrf_token
from .rate_limit import RateLimitMiddleware
from .security import SecurityHeadersMiddleware, sanitize_input, validate_ip

logger = get_logger(__name__)


def install_security_middleware(app: FastAPI, config: Optional[ShopConfig] = None) -> None:
    """
    Wire the shop security stack onto a FastAPI/Starlette app.

    Starlette runs the last-added middleware first, so requests pass the
    rate limiter, then CSRF, and responses always get security headers.
    """
    config = config or get_shop_config()

    redis_client = None
    if config.redis_configured:
        redis_client = get_redis(config)
    else:
        logger.info("Upstash Redis not configured, rate limiting is per-process")

    app.add_middleware(CSRFMiddleware, secret=config.csrf_secret)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=config.rate_limit_per_minute,
        redis_client=redis_client,
        production=config.is_production,
    )
    app.add_middleware(SecurityHeadersMiddleware, production=config.is_production)


__all__ = [
    "CSRFMiddleware",
    "CSRFTokens",
    "RateLimitMiddleware",
    "SecurityHeadersMiddleware",
    "generate_csrf_token",
    "install_security_middleware",
    "sanitize_input",
    "validate_ip",
    "verify_csrf_token",
]
