"""
Checkout-related exceptions.
"""

from .base import PetShopException


class CheckoutException(PetShopException):
    """Base exception for checkout errors."""
    pass


class CheckoutValidationException(CheckoutException):
    """Raised when checkout form input is missing or invalid."""

    def __init__(self, field_errors: dict[str, str]):
        fields = ', '.join(field_errors)
        super().__init__(
            f"Please fill in all required fields: {fields}",
            details={'fields': fields}
        )
        self.field_errors = field_errors


class NotAuthenticatedException(CheckoutException):
    """Raised when checkout is started without an authenticated user."""

    def __init__(self):
        super().__init__("Login required to checkout")


class InvalidCheckoutTransitionException(CheckoutException):
    """Raised when a checkout action is not allowed from the current step."""

    def __init__(self, current_step: str, action: str):
        super().__init__(
            f"Checkout action '{action}' not allowed in step '{current_step}'",
            details={'current_step': current_step, 'action': action}
        )
        self.current_step = current_step
        self.action = action
