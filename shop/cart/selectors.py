"""Read-only views over CartState."""
from decimal import Decimal
from typing import List, Optional

from .models import Cart, CartErrorKind, CartItem, CartState


def select_cart(state: CartState) -> Optional[Cart]:
    return state.cart


def select_items(state: CartState) -> List[CartItem]:
    return list(state.cart.items) if state.cart else []


def select_item_count(state: CartState) -> int:
    """Sum of quantities; 0 with no cart."""
    return state.cart.total_items if state.cart else 0


def select_total(state: CartState) -> Decimal:
    return state.cart.total if state.cart else Decimal("0")


def select_is_loading(state: CartState) -> bool:
    return state.is_loading


def select_error(state: CartState) -> Optional[str]:
    return state.error


def select_error_kind(state: CartState) -> Optional[CartErrorKind]:
    return state.error_kind
