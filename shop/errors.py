"""
Common error messages and exceptions.

Centralized error messages to avoid string duplication across the cart
controller, the remote cart client and the security middleware.
"""

# Cart operation errors (shown to the caller, never the underlying cause)
ERROR_FETCH_CART = "Failed to fetch cart"
ERROR_ADD_ITEM = "Failed to add item to cart"
ERROR_UPDATE_QUANTITY = "Failed to update item quantity"
ERROR_REMOVE_ITEM = "Failed to remove item from cart"
ERROR_CLEAR_CART = "Failed to clear cart"
ERROR_APPLY_DISCOUNT = "Failed to apply discount"
ERROR_REMOVE_DISCOUNT = "Failed to remove discount"

# Validation errors
ERROR_INVALID_QUANTITY = "Quantity must be a positive integer"
ERROR_INVALID_PRODUCT = "Product ID is required"
ERROR_INVALID_ITEM = "Item ID is required"
ERROR_EMPTY_DISCOUNT_CODE = "Discount code is required"

# Security errors
ERROR_SECURITY_CONFIG = "Security configuration error"
ERROR_CSRF_SECRET_MISSING = "CSRF_SECRET environment variable is required"
ERROR_SERVER_CONFIG = "Server configuration error"
ERROR_CSRF_TOKEN_MISSING = "CSRF token missing"
ERROR_CSRF_TOKEN_INVALID = "Invalid CSRF token"
ERROR_RATE_LIMITED = "Rate limit exceeded. Please try again later."
ERROR_ACCESS_DENIED = "Access denied"


class ShopError(Exception):
    """Base class for shop core errors."""


class CartValidationError(ShopError, ValueError):
    """Input rejected locally, before any remote call."""


class CartApiError(ShopError):
    """Remote cart call failed (transport, HTTP status or payload)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SecurityConfigurationError(ShopError):
    """Deployment is missing security configuration (e.g. CSRF secret)."""
