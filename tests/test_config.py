"""Tests for environment configuration"""
from decimal import Decimal

import pytest

from shop.config import ShopConfig, get_shop_config
from shop.pricing import PricingConfig


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "SHOP_CURRENCY",
        "SHOP_TAX_RATE",
        "SHOP_SHIPPING_RATE",
        "SHOP_FREE_SHIPPING_THRESHOLD",
        "SHOP_API_URL",
        "SHOP_RATE_LIMIT_PER_MINUTE",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = ShopConfig.from_env()

    assert config.currency == "USD"
    assert config.tax_rate == Decimal("0")
    assert config.api_url == "http://localhost:3000"
    assert config.rate_limit_per_minute == 100
    assert config.is_production is False
    assert config.redis_configured is False


def test_reads_pricing_settings(clean_env):
    clean_env.setenv("SHOP_TAX_RATE", "0.08")
    clean_env.setenv("SHOP_SHIPPING_RATE", "5.99")
    clean_env.setenv("SHOP_FREE_SHIPPING_THRESHOLD", "25")
    clean_env.setenv("SHOP_CURRENCY", "eur")
    clean_env.setenv("SHOP_API_URL", "https://shop.example.com/")

    config = ShopConfig.from_env()

    assert config.currency == "EUR"
    assert config.api_url == "https://shop.example.com"
    assert config.pricing == PricingConfig(
        tax_rate=Decimal("0.08"),
        shipping_rate=Decimal("5.99"),
        free_shipping_threshold=Decimal("25"),
    )


@pytest.mark.parametrize(
    "name, value",
    [
        ("SHOP_TAX_RATE", "1"),
        ("SHOP_TAX_RATE", "abc"),
        ("SHOP_SHIPPING_RATE", "-1"),
        ("SHOP_RATE_LIMIT_PER_MINUTE", "lots"),
    ],
)
def test_invalid_values(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        ShopConfig.from_env()


def test_singleton_is_cached(clean_env):
    assert get_shop_config() is get_shop_config()


def test_production_flag(clean_env):
    clean_env.setenv("ENVIRONMENT", "Production")

    assert ShopConfig.from_env().is_production is True
