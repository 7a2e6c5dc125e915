"""Tests for catalog helpers and pagination"""
import random
import re
from decimal import Decimal

import pytest

from shop.utils.catalog import (
    IN_STOCK,
    LOW_STOCK,
    OUT_OF_STOCK,
    convert_dimensions,
    convert_weight,
    filter_products_by_price,
    format_dimensions,
    format_weight,
    generate_barcode,
    generate_product_variants,
    generate_sku,
    generate_slug,
    get_inventory_status,
    search_products,
    sort_products,
)
from shop.utils.pagination import build_pagination, normalize_pagination, safe_sort

PRODUCTS = [
    {"name": "Red Mug", "description": "Ceramic coffee mug", "price": 12.5},
    {"name": "Blue T-Shirt", "description": "Organic cotton", "price": 25},
    {"name": "Poster", "description": "Matte print of a red fox", "price": 8},
]


class TestSlugAndCodes:
    def test_slug(self):
        assert generate_slug("Hello World!") == "hello-world"
        assert generate_slug("Café (Deluxe) Edition") == "cafe-deluxe-edition"

    def test_sku(self):
        sku = generate_sku("Blue T-Shirt", "large")

        assert sku.startswith("BLUETSLAR")
        assert re.fullmatch(r"BLUETSLAR\d{6}", sku)

    def test_barcode_check_digit(self):
        code = generate_barcode(random.Random(42))

        assert len(code) == 13 and code.isdigit()
        digits = [int(c) for c in code]
        checksum = sum(d if i % 2 == 0 else d * 3 for i, d in enumerate(digits[:12]))
        assert (checksum + digits[12]) % 10 == 0


class TestInventoryStatus:
    @pytest.mark.parametrize(
        "track, quantity, low, expected",
        [
            (False, 0, 5, IN_STOCK),
            (True, 0, 5, OUT_OF_STOCK),
            (True, 5, 5, LOW_STOCK),
            (True, 6, 5, IN_STOCK),
        ],
    )
    def test_status(self, track, quantity, low, expected):
        assert get_inventory_status(track, quantity, low) == expected


class TestProductLists:
    def test_search_name_and_description(self):
        assert [p["name"] for p in search_products(PRODUCTS, " RED ")] == ["Red Mug", "Poster"]

    def test_blank_search_returns_all(self):
        assert search_products(PRODUCTS, "  ") == PRODUCTS

    def test_sort_by_price_desc(self):
        assert [p["price"] for p in sort_products(PRODUCTS, "price", "desc")] == [25, 12.5, 8]

    def test_sort_by_name(self):
        assert [p["name"] for p in sort_products(PRODUCTS, "name")] == ["Blue T-Shirt", "Poster", "Red Mug"]

    def test_sort_missing_field_keeps_order(self):
        assert sort_products(PRODUCTS, "rating") == PRODUCTS

    def test_filter_by_price(self):
        assert [p["price"] for p in filter_products_by_price(PRODUCTS, min_price=10)] == [12.5, 25]
        assert [p["price"] for p in filter_products_by_price(PRODUCTS, 8, "12.50")] == [12.5, 8]


class TestVariants:
    def test_combinations(self):
        variants = generate_product_variants({"Size": ["S", "M"], "Color": ["Red", "Blue"]})

        assert len(variants) == 4
        assert variants[0] == {
            "option1Name": "Size",
            "option1Value": "S",
            "option2Name": "Color",
            "option2Value": "Red",
        }

    def test_no_options(self):
        assert generate_product_variants({}) == []


class TestUnits:
    def test_convert_weight(self):
        assert convert_weight(2, "kg", "g") == Decimal("2000")
        assert convert_weight(1, "lb", "oz").quantize(Decimal("0.01")) == Decimal("16.00")

    def test_convert_dimensions(self):
        assert convert_dimensions(1, "in", "cm") == Decimal("2.54")

    def test_format(self):
        assert format_weight(1.5) == "1.5 kg"
        assert format_dimensions(10, 20, 5) == "10 × 20 × 5 cm"


class TestPagination:
    @pytest.mark.parametrize(
        "page, limit, expected",
        [
            (1, 12, (1, 12, 0)),
            ("3", "20", (3, 20, 40)),
            (0, 500, (1, 100, 0)),
            ("x", None, (1, 12, 0)),
            (2, -5, (2, 1, 1)),
        ],
    )
    def test_normalize(self, page, limit, expected):
        assert normalize_pagination(page, limit) == expected

    def test_build(self):
        assert build_pagination(2, 10, 35) == {
            "page": 2,
            "limit": 10,
            "total": 35,
            "totalPages": 4,
            "hasNext": True,
            "hasPrev": True,
        }

    def test_safe_sort(self):
        allowed = ["createdAt", "name", "price"]

        assert safe_sort("price", "asc", allowed) == ("price", "asc")
        assert safe_sort("password; DROP", "sideways", allowed) == ("createdAt", "desc")
