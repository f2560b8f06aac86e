"""
Inventory-related exceptions.
"""

from .base import PetShopException


class InventoryException(PetShopException):
    """Base exception for stock and availability errors."""
    pass


class StaleInventoryException(InventoryException):
    """
    Raised when cart lines no longer match available stock or pet availability.

    Carries the full issue list so the cart view can show every offending line.
    """

    def __init__(self, issues: list):
        super().__init__(
            f"{len(issues)} cart item(s) need attention before checkout",
            details={'issue_count': len(issues)}
        )
        self.issues = issues
