"""
Cart-related exceptions.
"""

from .base import PetShopException


class CartException(PetShopException):
    """Base exception for cart-related errors."""
    pass


class EmptyCartException(CartException):
    """Raised when trying to checkout with empty cart."""

    def __init__(self):
        super().__init__("Cart is empty")


class InvalidOperationException(CartException):
    """
    Raised when a cart operation would break a line item invariant.

    Example: changing the quantity of a pet line away from 1. The cart is
    left untouched.
    """

    def __init__(self, item_id: str, reason: str):
        super().__init__(
            f"Invalid cart operation on {item_id}: {reason}",
            details={'item_id': item_id, 'reason': reason}
        )
        self.item_id = item_id
        self.reason = reason
