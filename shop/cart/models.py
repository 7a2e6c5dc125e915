"""Cart wire models and controller state.

Field names on the wire are camelCase (cartId, discountAmount, ...) to stay
compatible with existing clients; Python code uses snake_case.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from shop.services.money import to_decimal, to_float


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",  # relations (product, variant, user) are not mirrored
        frozen=True,
    )

    def to_dict(self) -> dict:
        """Serialize to the camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


class CartItem(_WireModel):
    """One line of a server-side cart."""
    id: str
    quantity: int
    price: Decimal
    cart_id: Optional[str] = None
    product_id: str
    variant_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return to_decimal(v)

    @field_serializer("price")
    def serialize_price(self, v: Decimal) -> float:
        return to_float(v)


class Cart(_WireModel):
    """Authoritative cart snapshot as returned by the cart API."""
    id: str
    session_id: Optional[str] = None
    items: List[CartItem] = []
    subtotal: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    shipping: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    discount_code: Optional[str] = None
    discount_amount: Decimal = Decimal("0")
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("subtotal", "tax", "shipping", "total", "discount_amount", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return to_decimal(v)

    @field_serializer("subtotal", "tax", "shipping", "total", "discount_amount")
    def serialize_amount(self, v: Decimal) -> float:
        return to_float(v)

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.quantity for item in self.items)


class CartItemInput(_WireModel):
    """Request body for adding an item."""
    product_id: str
    variant_id: Optional[str] = None
    quantity: int = 1

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CartErrorKind(str, Enum):
    """Why the last operation failed."""
    VALIDATION = "validation"  # rejected locally, no remote call
    REMOTE = "remote"  # network/HTTP failure, retryable
    CONFIGURATION = "configuration"  # deployment misconfigured, not retryable


@dataclass
class CartState:
    """State mirrored by CartController.

    Only the controller writes to it; consumers read through the selectors.
    `cart` is always replaced wholesale, never edited in place.
    """
    cart: Optional[Cart] = None
    is_loading: bool = False
    error: Optional[str] = None
    error_kind: Optional[CartErrorKind] = None
