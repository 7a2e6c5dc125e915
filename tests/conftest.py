"""Pytest configuration and fixtures"""
import os
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

# Set test environment variables
os.environ.setdefault("CSRF_SECRET", "test_csrf_secret")
os.environ.setdefault("SHOP_API_URL", "http://shop.test")
os.environ.pop("UPSTASH_REDIS_REST_URL", None)
os.environ.pop("UPSTASH_REDIS_REST_TOKEN", None)

from shop.cart import Cart, CartApiClient, CartController  # noqa: E402
from shop.config import get_shop_config  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_config_cache():
    get_shop_config.cache_clear()
    yield
    get_shop_config.cache_clear()


@pytest.fixture
def sample_cart_payload():
    """Cart as returned by the cart API"""
    return {
        "id": "cart-123",
        "sessionId": "sess-1",
        "items": [
            {
                "id": "item-1",
                "quantity": 2,
                "price": 10.0,
                "cartId": "cart-123",
                "productId": "product-1",
                "variantId": None,
                "createdAt": "2025-01-01T00:00:00Z",
                "updatedAt": "2025-01-01T00:00:00Z",
            },
            {
                "id": "item-2",
                "quantity": 1,
                "price": 19.99,
                "cartId": "cart-123",
                "productId": "product-2",
                "variantId": "variant-7",
            },
        ],
        "subtotal": 39.99,
        "tax": 3.2,
        "shipping": 5.99,
        "total": 49.18,
        "discountCode": None,
        "discountAmount": 0,
        "userId": "user-123",
        "createdAt": "2025-01-01T00:00:00Z",
        "updatedAt": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_cart(sample_cart_payload):
    return Cart.model_validate(sample_cart_payload)


@pytest.fixture
def discounted_cart(sample_cart_payload):
    payload = dict(sample_cart_payload, discountCode="SAVE10", discountAmount=4.0, total=45.18)
    return Cart.model_validate(payload)


@pytest.fixture
def mock_cart_api(sample_cart):
    """Mock cart API client; every call succeeds with sample_cart"""
    api = Mock(spec=CartApiClient)
    api.get_cart = AsyncMock(return_value=sample_cart)
    api.add_item = AsyncMock(return_value=sample_cart)
    api.update_quantity = AsyncMock(return_value=sample_cart)
    api.remove_item = AsyncMock(return_value=sample_cart)
    api.clear_cart = AsyncMock(return_value=None)
    api.apply_discount = AsyncMock(return_value=sample_cart)
    api.remove_discount = AsyncMock(return_value=sample_cart)
    return api


@pytest.fixture
def controller(mock_cart_api):
    return CartController(api=mock_cart_api)


@pytest.fixture
def make_api_client():
    """Build a CartApiClient whose transport is the given handler"""
    def _make(handler, token_provider=lambda: "csrf-token"):
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            base_url="http://shop.test",
        )
        client = CartApiClient(
            base_url="http://shop.test",
            token_provider=token_provider,
            http_client=http_client,
        )
        return client

    return _make
