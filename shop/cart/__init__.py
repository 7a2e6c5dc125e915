"""Cart package: wire models, remote client, state controller and selectors."""
from .models import Cart, CartErrorKind, CartItem, CartItemInput, CartState
from .client import CartApiClient
from .service import CartController, get_cart_controller
from .selectors import (
    select_cart,
    select_error,
    select_error_kind,
    select_is_loading,
    select_item_count,
    select_items,
    select_total,
)

__all__ = [
    "Cart",
    "CartErrorKind",
    "CartItem",
    "CartItemInput",
    "CartState",
    "CartApiClient",
    "CartController",
    "get_cart_controller",
    "select_cart",
    "select_error",
    "select_error_kind",
    "select_is_loading",
    "select_item_count",
    "select_items",
    "select_total",
]
