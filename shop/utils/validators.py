"""Input validators for catalog and checkout data."""
import re
from typing import Any, List, Mapping, Tuple

MAX_NAME_LENGTH = 255
MAX_SKU_LENGTH = 100

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")
_PHONE_STRIP_RE = re.compile(r"[\s\-()]")

ZIP_CODE_PATTERNS = {
    "US": re.compile(r"^\d{5}(-\d{4})?$"),
    "CA": re.compile(r"^[A-Za-z]\d[A-Za-z] \d[A-Za-z]\d$"),
    "GB": re.compile(r"^[A-Za-z]{1,2}\d[A-Za-z\d]? \d[A-Za-z]{2}$"),
    "DE": re.compile(r"^\d{5}$"),
    "FR": re.compile(r"^\d{5}$"),
    "IT": re.compile(r"^\d{5}$"),
    "ES": re.compile(r"^\d{5}$"),
    "AU": re.compile(r"^\d{4}$"),
    "NZ": re.compile(r"^\d{4}$"),
}

# Numeric fields that may not be negative, with their error messages
_NON_NEGATIVE_FIELDS = (
    ("price", "Product price must be positive"),
    ("comparePrice", "Compare price must be positive"),
    ("costPrice", "Cost price must be positive"),
    ("quantity", "Quantity must be non-negative"),
    ("weight", "Weight must be non-negative"),
    ("length", "Length must be non-negative"),
    ("width", "Width must be non-negative"),
    ("height", "Height must be non-negative"),
)


def validate_product_data(data: Mapping[str, Any]) -> Tuple[bool, List[str]]:
    """
    Validate a product create/update payload (camelCase keys).

    Returns:
        (valid, errors) - errors lists every problem found
    """
    errors: List[str] = []
    name = data.get("name")
    description = data.get("description")

    if not name or not str(name).strip():
        errors.append("Product name is required")
    if not description or not str(description).strip():
        errors.append("Product description is required")
    if data.get("price") is None:
        errors.append("Product price is required")

    if name and len(name) > MAX_NAME_LENGTH:
        errors.append("Product name must be less than 255 characters")

    for field, message in _NON_NEGATIVE_FIELDS:
        value = data.get(field)
        if value is not None and value < 0:
            errors.append(message)

    sku = data.get("sku")
    if sku and len(sku) > MAX_SKU_LENGTH:
        errors.append("SKU must be less than 100 characters")

    return len(errors) == 0, errors


def validate_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    return bool(_PHONE_RE.match(_PHONE_STRIP_RE.sub("", phone)))


def validate_zip_code(zip_code: str, country: str = "US") -> bool:
    """Unknown countries are accepted."""
    pattern = ZIP_CODE_PATTERNS.get(country.upper())
    return bool(pattern.match(zip_code)) if pattern else True


def validate_credit_card(card_number: str) -> bool:
    """Luhn checksum over the digits of card_number (13-19 digits)."""
    digits = [int(c) for c in card_number if c.isdigit()]
    if len(digits) < 13 or len(digits) > 19:
        return False

    total = 0
    for index, digit in enumerate(reversed(digits)):
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0
