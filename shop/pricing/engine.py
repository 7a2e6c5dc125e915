"""
Pricing Engine

Pure functions turning line items and shop settings into order totals.
Arithmetic is exact Decimal throughout; each component is rounded to cents
once, when the OrderTotals is built, and the total is the sum of those
rounded components so the stored figures always add up.
"""
from decimal import Decimal
from typing import Iterable, Union

from shop.services.money import ZERO, multiply, round_money, subtract, to_decimal, Number
from .models import LineItem, OrderTotals, PricingConfig

ONE_HUNDRED = Decimal("100")


def calculate_tax(subtotal: Number, tax_rate: Number) -> Decimal:
    """Tax on an (unrounded) subtotal."""
    return multiply(subtotal, tax_rate)


def calculate_shipping(
    subtotal: Number,
    shipping_rate: Number,
    free_shipping_threshold: Number = 0,
) -> Decimal:
    """
    Flat shipping, waived when a positive threshold is reached.

    subtotal == threshold counts as reached.
    """
    threshold = to_decimal(free_shipping_threshold)
    if threshold > 0 and to_decimal(subtotal) >= threshold:
        return ZERO
    return to_decimal(shipping_rate)


def calculate_discounted_price(price: Number, discount_percent: Number) -> Decimal:
    """Unit price after a percentage discount, rounded to cents."""
    multiplier = subtract(1, to_decimal(discount_percent) / ONE_HUNDRED)
    return round_money(multiply(price, multiplier))


def _as_line_item(item: Union[LineItem, dict]) -> LineItem:
    if isinstance(item, LineItem):
        return item
    return LineItem.from_dict(item)


def compute_totals(
    items: Iterable[Union[LineItem, dict]],
    tax_rate: Number = 0,
    shipping_rate: Number = 0,
    discount_amount: Number = 0,
    free_shipping_threshold: Number = 0,
) -> OrderTotals:
    """
    Compute subtotal, tax, shipping, discount and total.

    Preconditions (not checked): unit prices and discount are non-negative,
    quantities positive, tax_rate in [0, 1).

    Args:
        items: LineItem instances or item dicts ({price, quantity})
        tax_rate: Fraction, e.g. 0.08
        shipping_rate: Flat shipping charge
        discount_amount: Requested discount; clamped to [0, subtotal]
        free_shipping_threshold: Subtotal at which shipping is free (0 = never)

    Returns:
        OrderTotals rounded to cents
    """
    subtotal = sum((_as_line_item(item).amount for item in items), ZERO)
    tax = calculate_tax(subtotal, tax_rate)
    shipping = calculate_shipping(subtotal, shipping_rate, free_shipping_threshold)
    discount = max(ZERO, min(to_decimal(discount_amount), subtotal))

    rounded_subtotal = round_money(subtotal)
    rounded_tax = round_money(tax)
    rounded_shipping = round_money(shipping)
    rounded_discount = round_money(discount)

    total = rounded_subtotal + rounded_tax + rounded_shipping - rounded_discount
    if total < 0:
        total = round_money(ZERO)

    return OrderTotals(
        subtotal=rounded_subtotal,
        tax=rounded_tax,
        shipping=rounded_shipping,
        discount=rounded_discount,
        total=total,
    )


def compute_totals_for_config(
    items: Iterable[Union[LineItem, dict]],
    config: PricingConfig,
    discount_amount: Number = 0,
) -> OrderTotals:
    """compute_totals with rates taken from a PricingConfig."""
    return compute_totals(
        items,
        tax_rate=config.tax_rate,
        shipping_rate=config.shipping_rate,
        discount_amount=discount_amount,
        free_shipping_threshold=config.free_shipping_threshold,
    )
