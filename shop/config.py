"""
Shop configuration from environment variables.

Usage:
    from shop.config import get_shop_config
    config = get_shop_config()
    totals = compute_totals_for_config(items, config.pricing)
"""
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Optional

from shop.logging import get_logger
from shop.pricing import PricingConfig
from shop.services.currency import DEFAULT_CURRENCY, is_supported_currency

logger = get_logger(__name__)

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_RATE_LIMIT_PER_MINUTE = 100


def _env_decimal(name: str, default: str = "0") -> Decimal:
    raw = os.environ.get(name, default) or default
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {raw!r}")
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class ShopConfig:
    """Runtime settings for pricing, the remote cart API and security."""
    currency: str = DEFAULT_CURRENCY
    tax_rate: Decimal = Decimal("0")
    shipping_rate: Decimal = Decimal("0")
    free_shipping_threshold: Decimal = Decimal("0")
    api_url: str = DEFAULT_API_URL
    csrf_secret: Optional[str] = None
    rate_limit_per_minute: int = DEFAULT_RATE_LIMIT_PER_MINUTE
    redis_url: Optional[str] = None
    redis_token: Optional[str] = None
    environment: str = "development"

    @property
    def pricing(self) -> PricingConfig:
        return PricingConfig(
            tax_rate=self.tax_rate,
            shipping_rate=self.shipping_rate,
            free_shipping_threshold=self.free_shipping_threshold,
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def redis_configured(self) -> bool:
        return bool(self.redis_url and self.redis_token)

    @classmethod
    def from_env(cls) -> "ShopConfig":
        """Read settings from the environment.

        Raises:
            ValueError: a numeric variable is malformed or out of range
        """
        tax_rate = _env_decimal("SHOP_TAX_RATE")
        if tax_rate >= 1:
            raise ValueError(f"SHOP_TAX_RATE must be a fraction below 1, got {tax_rate}")

        currency = (os.environ.get("SHOP_CURRENCY") or DEFAULT_CURRENCY).upper()
        if not is_supported_currency(currency):
            logger.warning(f"Unknown SHOP_CURRENCY {currency}, amounts will show the bare code")

        return cls(
            currency=currency,
            tax_rate=tax_rate,
            shipping_rate=_env_decimal("SHOP_SHIPPING_RATE"),
            free_shipping_threshold=_env_decimal("SHOP_FREE_SHIPPING_THRESHOLD"),
            api_url=os.environ.get("SHOP_API_URL", DEFAULT_API_URL).rstrip("/"),
            csrf_secret=os.environ.get("CSRF_SECRET") or None,
            rate_limit_per_minute=_env_int("SHOP_RATE_LIMIT_PER_MINUTE", DEFAULT_RATE_LIMIT_PER_MINUTE),
            redis_url=os.environ.get("UPSTASH_REDIS_REST_URL") or None,
            redis_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN") or None,
            environment=os.environ.get("ENVIRONMENT", "development").lower(),
        )


@lru_cache(maxsize=1)
def get_shop_config() -> ShopConfig:
    """Get ShopConfig singleton (read once from the environment)."""
    return ShopConfig.from_env()
