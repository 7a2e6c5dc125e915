"""Tests for the Redis client factory"""
import pytest

from shop import db
from shop.config import ShopConfig


@pytest.fixture(autouse=True)
def _reset_redis(monkeypatch):
    monkeypatch.setattr(db, "_redis_client", None)


def test_get_redis_requires_configuration():
    with pytest.raises(ValueError, match="UPSTASH_REDIS_REST_URL"):
        db.get_redis(ShopConfig())


def test_get_redis_singleton():
    config = ShopConfig(redis_url="https://example.upstash.io", redis_token="token")

    client = db.get_redis(config)

    assert db.get_redis(config) is client


def test_rate_limit_key():
    assert db.RedisKeys.rate_limit_key("203.0.113.1", "/api/shop/cart") == "rate_limit:203.0.113.1:/api/shop/cart"
