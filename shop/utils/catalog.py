"""
Catalog helpers: slugs, SKUs, barcodes, inventory status, product list
filtering/sorting, variant generation and unit conversion.
"""
import random
import re
import time
from datetime import datetime
from decimal import Decimal
from itertools import product as cartesian_product
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from slugify import slugify

from shop.services.money import to_decimal

T = TypeVar("T", bound=Mapping[str, Any])

IN_STOCK = "in_stock"
LOW_STOCK = "low_stock"
OUT_OF_STOCK = "out_of_stock"

MAX_VARIANT_OPTIONS = 3

# Grams per unit
WEIGHT_UNITS: Dict[str, Decimal] = {
    "g": Decimal("1"),
    "kg": Decimal("1000"),
    "oz": Decimal("28.3495"),
    "lb": Decimal("453.592"),
}

# Millimetres per unit
DIMENSION_UNITS: Dict[str, Decimal] = {
    "mm": Decimal("1"),
    "cm": Decimal("10"),
    "m": Decimal("1000"),
    "in": Decimal("25.4"),
    "ft": Decimal("304.8"),
}

_NON_ALNUM = re.compile(r"[^A-Z0-9]")
_SLUG_STRIP = re.compile(r"[*+~.()'\"!:@]")


def generate_slug(text: str) -> str:
    """URL slug: lowercase, ASCII, hyphen separated."""
    return slugify(_SLUG_STRIP.sub("", text), lowercase=True)


def generate_sku(product_name: str, variant: Optional[str] = None) -> str:
    """
    SKU from the first 6 alphanumerics of the name, the first 3 of the
    variant and the last 6 digits of the current millisecond timestamp.
    """
    name_code = _NON_ALNUM.sub("", product_name.upper())[:6]
    variant_code = _NON_ALNUM.sub("", variant.upper())[:3] if variant else ""
    timestamp = str(int(time.time() * 1000))[-6:]
    return f"{name_code}{variant_code}{timestamp}"


def generate_barcode(rng: Optional[random.Random] = None) -> str:
    """Random 13-digit EAN-13 code with a valid check digit."""
    rng = rng or random.Random()
    digits = [rng.randint(0, 9) for _ in range(12)]
    checksum = sum(d if i % 2 == 0 else d * 3 for i, d in enumerate(digits))
    check_digit = (10 - checksum % 10) % 10
    return "".join(str(d) for d in digits) + str(check_digit)


def get_inventory_status(track_quantity: bool, quantity: int, low_stock_level: int) -> str:
    if not track_quantity:
        return IN_STOCK
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity <= low_stock_level:
        return LOW_STOCK
    return IN_STOCK


def search_products(products: Sequence[T], query: str) -> List[T]:
    """Case-insensitive substring match on name or description."""
    term = query.strip().lower()
    if not term:
        return list(products)
    return [
        p for p in products
        if term in (p.get("name") or "").lower() or term in (p.get("description") or "").lower()
    ]


def _sortable(value: Any) -> bool:
    return isinstance(value, (str, int, float, Decimal, datetime)) and not isinstance(value, bool)


def sort_products(products: Sequence[T], sort_by: str, sort_order: str = "asc") -> List[T]:
    """
    Stable sort by one field. Products whose value is missing or not
    comparable keep their relative order after the sortable ones.
    """
    sortable = [p for p in products if _sortable(p.get(sort_by))]
    rest = [p for p in products if not _sortable(p.get(sort_by))]
    try:
        sortable.sort(key=lambda p: p[sort_by], reverse=(sort_order == "desc"))
    except TypeError:
        # mixed types (e.g. str and int) in the same field
        return list(products)
    return sortable + rest


def filter_products_by_price(
    products: Iterable[T],
    min_price: Optional[Any] = None,
    max_price: Optional[Any] = None,
) -> List[T]:
    low = to_decimal(min_price) if min_price is not None else None
    high = to_decimal(max_price) if max_price is not None else None
    result = []
    for p in products:
        price = to_decimal(p.get("price"))
        if low is not None and price < low:
            continue
        if high is not None and price > high:
            continue
        result.append(p)
    return result


def generate_product_variants(options: Mapping[str, Sequence[str]]) -> List[Dict[str, str]]:
    """
    Every combination of option values, as option1Name/option1Value ...
    option3Name/option3Value dicts. Options beyond the third are combined
    but not labelled.
    """
    names = list(options.keys())
    if not names:
        return []

    variants = []
    for combination in cartesian_product(*(options[name] for name in names)):
        variant: Dict[str, str] = {}
        for index, (name, value) in enumerate(zip(names, combination)):
            if index >= MAX_VARIANT_OPTIONS:
                break
            variant[f"option{index + 1}Name"] = name
            variant[f"option{index + 1}Value"] = value
        variants.append(variant)
    return variants


def _convert(value: Any, from_unit: str, to_unit: str, table: Dict[str, Decimal]) -> Decimal:
    # unknown units count as the base unit
    from_factor = table.get(from_unit, Decimal("1"))
    to_factor = table.get(to_unit, Decimal("1"))
    return to_decimal(value) * from_factor / to_factor


def convert_weight(weight: Any, from_unit: str, to_unit: str) -> Decimal:
    return _convert(weight, from_unit, to_unit, WEIGHT_UNITS)


def convert_dimensions(dimension: Any, from_unit: str, to_unit: str) -> Decimal:
    return _convert(dimension, from_unit, to_unit, DIMENSION_UNITS)


def format_weight(weight: Any, unit: str = "kg") -> str:
    return f"{weight} {unit}"


def format_dimensions(length: Any, width: Any, height: Any, unit: str = "cm") -> str:
    return f"{length} × {width} × {height} {unit}"
