"""Pricing models with Decimal-based amounts."""
from dataclasses import dataclass
from decimal import Decimal

from shop.services.money import to_decimal, to_float


@dataclass
class LineItem:
    """A priced quantity of one catalog entry.

    Callers guarantee unit_price >= 0 and quantity > 0; the engine does not
    re-check.
    """
    unit_price: Decimal
    quantity: int

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)

    @property
    def amount(self) -> Decimal:
        """Unrounded unit_price * quantity."""
        return self.unit_price * self.quantity

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Build from a cart/order item payload ({price|unitPrice, quantity})."""
        price = data.get("unit_price", data.get("unitPrice", data.get("price")))
        return cls(unit_price=to_decimal(price), quantity=int(data["quantity"]))


@dataclass(frozen=True)
class PricingConfig:
    """Shop-wide pricing settings.

    A free_shipping_threshold of 0 means free shipping is never granted.
    """
    tax_rate: Decimal = Decimal("0")
    shipping_rate: Decimal = Decimal("0")
    free_shipping_threshold: Decimal = Decimal("0")

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "tax_rate", to_decimal(self.tax_rate))
        object.__setattr__(self, "shipping_rate", to_decimal(self.shipping_rate))
        object.__setattr__(self, "free_shipping_threshold", to_decimal(self.free_shipping_threshold))


@dataclass(frozen=True)
class OrderTotals:
    """Rounded totals for a set of line items.

    total == subtotal + tax + shipping - discount and discount <= subtotal.
    """
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    discount: Decimal
    total: Decimal

    def to_dict(self) -> dict:
        """Wire shape (floats, as the cart/order payloads carry them)."""
        return {
            "subtotal": to_float(self.subtotal),
            "tax": to_float(self.tax),
            "shipping": to_float(self.shipping),
            "discount": to_float(self.discount),
            "total": to_float(self.total),
        }
