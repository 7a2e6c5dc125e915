"""Cart state controller mirroring the server-side cart."""
from decimal import Decimal
from typing import Awaitable, Callable, Optional, Union

from pydantic import ValidationError

from shop.errors import (
    ERROR_ADD_ITEM,
    ERROR_APPLY_DISCOUNT,
    ERROR_CLEAR_CART,
    ERROR_EMPTY_DISCOUNT_CODE,
    ERROR_FETCH_CART,
    ERROR_INVALID_ITEM,
    ERROR_INVALID_PRODUCT,
    ERROR_INVALID_QUANTITY,
    ERROR_REMOVE_DISCOUNT,
    ERROR_REMOVE_ITEM,
    ERROR_SECURITY_CONFIG,
    ERROR_UPDATE_QUANTITY,
    CartApiError,
    CartValidationError,
    SecurityConfigurationError,
)
from shop.logging import get_logger, sanitize_id_for_logging
from .client import CartApiClient
from .models import Cart, CartErrorKind, CartItemInput, CartState

logger = get_logger(__name__)

RemoteCall = Callable[[], Awaitable[Optional[Cart]]]


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_non_positive_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, Decimal) and value.is_nan():
        return False
    return value <= 0


class CartController:
    """
    Holds the client-side view of the cart and funnels every change through
    one remote call.

    Each operation:
    - sets is_loading=True and clears error
    - makes exactly one call to the cart API (none if local validation fails)
    - on success replaces the cart snapshot (clear_cart sets it to None)
    - on failure sets error/error_kind and leaves the cart untouched
    - always ends with is_loading=False

    Operations are not sequenced against each other: if two overlap, whichever
    settles last determines the final state, even if it was issued first.
    Callers that need ordering must await one operation before starting the
    next.
    """

    def __init__(self, api: Optional[CartApiClient] = None, state: Optional[CartState] = None):
        self._api = api
        self._state = state or CartState()

    @property
    def api(self) -> CartApiClient:
        """Cart API client (lazy initialization)."""
        if self._api is None:
            self._api = CartApiClient()
        return self._api

    @property
    def state(self) -> CartState:
        return self._state

    def _begin(self) -> None:
        self._state.is_loading = True
        self._state.error = None
        self._state.error_kind = None

    def _succeed(self, cart: Optional[Cart]) -> None:
        self._state.cart = cart
        self._state.is_loading = False

    def _fail(self, message: str, kind: CartErrorKind) -> None:
        self._state.error = message
        self._state.error_kind = kind
        self._state.is_loading = False

    async def _run(self, operation: str, error_message: str, call: RemoteCall) -> bool:
        self._begin()
        try:
            cart = await call()
        except CartValidationError as e:
            logger.info(f"Cart {operation} rejected: {e}")
            self._fail(str(e), CartErrorKind.VALIDATION)
            return False
        except SecurityConfigurationError:
            logger.error(f"Cart {operation} aborted: security configuration error")
            self._fail(ERROR_SECURITY_CONFIG, CartErrorKind.CONFIGURATION)
            return False
        except CartApiError as e:
            logger.warning(f"Cart {operation} failed (status={e.status_code})", exc_info=True)
            self._fail(error_message, CartErrorKind.REMOTE)
            return False
        except Exception as e:
            logger.error(f"Unexpected error during cart {operation}: {e}", exc_info=True)
            self._fail(error_message, CartErrorKind.REMOTE)
            return False

        self._succeed(cart)
        return True

    async def fetch_cart(self) -> bool:
        """Load the current cart snapshot."""
        return await self._run("fetch", ERROR_FETCH_CART, lambda: self.api.get_cart())

    async def add_item(self, item: Union[CartItemInput, dict]) -> bool:
        """Add a product (optionally a variant) with a positive quantity."""

        async def call() -> Cart:
            payload = item if isinstance(item, CartItemInput) else _build_item_input(item)
            if not payload.product_id:
                raise CartValidationError(ERROR_INVALID_PRODUCT)
            if not _is_positive_int(payload.quantity):
                raise CartValidationError(ERROR_INVALID_QUANTITY)
            return await self.api.add_item(payload)

        return await self._run("add", ERROR_ADD_ITEM, call)

    async def update_quantity(self, item_id: str, quantity: int) -> bool:
        """
        Set an item's quantity.

        A quantity of 0 or less is a removal: the outcome is exactly that of
        remove_item(item_id) and the update endpoint is not called.
        """
        if _is_non_positive_number(quantity):
            return await self.remove_item(item_id)

        async def call() -> Cart:
            if not item_id:
                raise CartValidationError(ERROR_INVALID_ITEM)
            if not _is_positive_int(quantity):
                raise CartValidationError(ERROR_INVALID_QUANTITY)
            return await self.api.update_quantity(item_id, quantity)

        return await self._run("update", ERROR_UPDATE_QUANTITY, call)

    async def remove_item(self, item_id: str) -> bool:
        async def call() -> Cart:
            if not item_id:
                raise CartValidationError(ERROR_INVALID_ITEM)
            logger.debug(f"Removing cart item {sanitize_id_for_logging(item_id)}")
            return await self.api.remove_item(item_id)

        return await self._run("remove", ERROR_REMOVE_ITEM, call)

    async def clear_cart(self) -> bool:
        """Empty the cart; the local snapshot becomes None on success."""

        async def call() -> None:
            await self.api.clear_cart()
            return None

        return await self._run("clear", ERROR_CLEAR_CART, call)

    async def apply_discount(self, code: str) -> bool:
        """Apply a discount code; the code's format is validated server-side."""

        async def call() -> Cart:
            if not isinstance(code, str) or not code.strip():
                raise CartValidationError(ERROR_EMPTY_DISCOUNT_CODE)
            return await self.api.apply_discount(code)

        return await self._run("apply-discount", ERROR_APPLY_DISCOUNT, call)

    async def remove_discount(self) -> bool:
        return await self._run("remove-discount", ERROR_REMOVE_DISCOUNT, lambda: self.api.remove_discount())


def _build_item_input(data: dict) -> CartItemInput:
    try:
        return CartItemInput.model_validate(data)
    except ValidationError as e:
        fields = {error["loc"][0] for error in e.errors() if error["loc"]}
        if "quantity" in fields and not fields & {"productId", "product_id"}:
            raise CartValidationError(ERROR_INVALID_QUANTITY) from e
        raise CartValidationError(ERROR_INVALID_PRODUCT) from e


# Singleton instance
_cart_controller: Optional[CartController] = None


def get_cart_controller() -> CartController:
    """Get CartController singleton."""
    global _cart_controller
    if _cart_controller is None:
        _cart_controller = CartController()
    return _cart_controller
