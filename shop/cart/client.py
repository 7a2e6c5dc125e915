"""Remote cart API client (httpx).

Every state-changing request carries a freshly generated X-CSRF-Token; the
token is produced before the request is built, so a missing secret aborts
the call without touching the network.
"""
from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from shop.config import get_shop_config
from shop.errors import (
    ERROR_ADD_ITEM,
    ERROR_APPLY_DISCOUNT,
    ERROR_CLEAR_CART,
    ERROR_FETCH_CART,
    ERROR_REMOVE_DISCOUNT,
    ERROR_REMOVE_ITEM,
    ERROR_SECURITY_CONFIG,
    ERROR_UPDATE_QUANTITY,
    CartApiError,
    SecurityConfigurationError,
)
from shop.logging import get_logger, sanitize_id_for_logging
from shop.middleware.csrf import CSRF_HEADER, generate_csrf_token
from .models import Cart, CartItemInput

logger = get_logger(__name__)

CART_PATH = "/api/shop/cart"
CART_ITEMS_PATH = f"{CART_PATH}/items"
CART_DISCOUNT_PATH = f"{CART_PATH}/discount"


def _item_path(item_id: str) -> str:
    return f"{CART_ITEMS_PATH}/{quote(item_id, safe='')}"


class CartApiClient:
    """Thin async client for the shop cart endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Callable[[], str] = generate_csrf_token,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or get_shop_config().api_url).rstrip("/")
        self._token_provider = token_provider
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(10.0, connect=5.0, read=10.0, write=10.0),
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "CartApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _csrf_token(self) -> str:
        try:
            return self._token_provider()
        except SecurityConfigurationError:
            logger.error("Failed to generate CSRF token: secret is not configured")
            raise
        except Exception as e:
            logger.error(f"Failed to generate CSRF token: {e}", exc_info=True)
            raise SecurityConfigurationError(ERROR_SECURITY_CONFIG) from e

    async def _request(
        self,
        method: str,
        path: str,
        error_message: str,
        json: Optional[dict] = None,
        mutating: bool = True,
    ) -> httpx.Response:
        headers = {CSRF_HEADER: self._csrf_token()} if mutating else {}
        client = await self._get_http_client()
        try:
            response = await client.request(method, path, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"{error_message}: {method} {path} returned HTTP {e.response.status_code}")
            raise CartApiError(error_message, status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            logger.warning(f"{error_message}: {method} {path} failed: {e!r}")
            raise CartApiError(error_message) from e
        return response

    @staticmethod
    def _parse_cart(response: httpx.Response, error_message: str) -> Cart:
        try:
            data: Any = response.json()
            # Accept both a bare cart and the {success, data} envelope
            if isinstance(data, dict) and "id" not in data and isinstance(data.get("data"), dict):
                data = data["data"]
            return Cart.model_validate(data)
        except (ValueError, ValidationError) as e:
            logger.warning(f"{error_message}: malformed cart payload: {e}")
            raise CartApiError(error_message, status_code=response.status_code) from e

    async def get_cart(self) -> Cart:
        response = await self._request("GET", CART_PATH, ERROR_FETCH_CART, mutating=False)
        return self._parse_cart(response, ERROR_FETCH_CART)

    async def add_item(self, item: CartItemInput) -> Cart:
        response = await self._request("POST", CART_ITEMS_PATH, ERROR_ADD_ITEM, json=item.to_dict())
        return self._parse_cart(response, ERROR_ADD_ITEM)

    async def update_quantity(self, item_id: str, quantity: int) -> Cart:
        logger.debug(f"Updating cart item {sanitize_id_for_logging(item_id)} to {quantity}")
        response = await self._request(
            "PUT", _item_path(item_id), ERROR_UPDATE_QUANTITY, json={"quantity": quantity}
        )
        return self._parse_cart(response, ERROR_UPDATE_QUANTITY)

    async def remove_item(self, item_id: str) -> Cart:
        response = await self._request("DELETE", _item_path(item_id), ERROR_REMOVE_ITEM)
        return self._parse_cart(response, ERROR_REMOVE_ITEM)

    async def clear_cart(self) -> None:
        await self._request("DELETE", CART_PATH, ERROR_CLEAR_CART)

    async def apply_discount(self, code: str) -> Cart:
        response = await self._request("POST", CART_DISCOUNT_PATH, ERROR_APPLY_DISCOUNT, json={"code": code})
        return self._parse_cart(response, ERROR_APPLY_DISCOUNT)

    async def remove_discount(self) -> Cart:
        response = await self._request("DELETE", CART_DISCOUNT_PATH, ERROR_REMOVE_DISCOUNT)
        return self._parse_cart(response, ERROR_REMOVE_DISCOUNT)
