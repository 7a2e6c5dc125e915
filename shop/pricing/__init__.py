"""Pricing package: line items, pricing config and order totals."""
from .models import LineItem, PricingConfig, OrderTotals
from .engine import (
    calculate_discounted_price,
    calculate_shipping,
    calculate_tax,
    compute_totals,
    compute_totals_for_config,
)

__all__ = [
    "LineItem",
    "PricingConfig",
    "OrderTotals",
    "calculate_discounted_price",
    "calculate_shipping",
    "calculate_tax",
    "compute_totals",
    "compute_totals_for_config",
]
