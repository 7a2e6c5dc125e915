"""Tests for validators"""
import pytest

from shop.utils.validators import (
    validate_credit_card,
    validate_email,
    validate_phone,
    validate_product_data,
    validate_zip_code,
)


def test_valid_product():
    valid, errors = validate_product_data({"name": "Mug", "description": "Ceramic", "price": 12.5})

    assert valid is True
    assert errors == []


def test_product_missing_fields():
    valid, errors = validate_product_data({"name": "  "})

    assert valid is False
    assert errors == [
        "Product name is required",
        "Product description is required",
        "Product price is required",
    ]


def test_product_negative_values():
    valid, errors = validate_product_data(
        {"name": "Mug", "description": "x", "price": -1, "weight": -2, "sku": "S" * 101}
    )

    assert valid is False
    assert "Product price must be positive" in errors
    assert "Weight must be non-negative" in errors
    assert "SKU must be less than 100 characters" in errors


def test_product_name_too_long():
    _, errors = validate_product_data({"name": "n" * 256, "description": "x", "price": 1})

    assert errors == ["Product name must be less than 255 characters"]


@pytest.mark.parametrize("email, expected", [("a@b.co", True), ("no-at.example", False), ("a b@c.d", False)])
def test_validate_email(email, expected):
    assert validate_email(email) is expected


@pytest.mark.parametrize(
    "phone, expected",
    [("+1 (555) 123-4567", True), ("0123456", False), ("+12345678901234567", False)],
)
def test_validate_phone(phone, expected):
    assert validate_phone(phone) is expected


@pytest.mark.parametrize(
    "zip_code, country, expected",
    [
        ("12345", "US", True),
        ("12345-6789", "us", True),
        ("1234", "US", False),
        ("K1A 0B1", "CA", True),
        ("SW1A 1AA", "GB", True),
        ("anything", "JP", True),
    ],
)
def test_validate_zip_code(zip_code, country, expected):
    assert validate_zip_code(zip_code, country) is expected


@pytest.mark.parametrize(
    "number, expected",
    [
        ("4539 1488 0343 6467", True),
        ("4539 1488 0343 6468", False),
        ("1234", False),
    ],
)
def test_validate_credit_card(number, expected):
    assert validate_credit_card(number) is expected
