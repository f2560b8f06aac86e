"""
Order-related exceptions.
"""

from .base import PetShopException


class OrderException(PetShopException):
    """Base exception for order-related errors."""
    pass


class OrderServiceException(OrderException):
    """
    Raised when the order service rejects a request or cannot be reached.

    status_code is None for transport failures (timeout, connection refused).
    """

    def __init__(self, operation: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"Order service {operation} failed: {reason}",
            details={'operation': operation, 'status_code': status_code}
        )
        self.operation = operation
        self.reason = reason
        self.status_code = status_code


class OrderNotFoundException(OrderServiceException):
    """Raised when order is not found by the order service."""

    def __init__(self, order_id: str):
        super().__init__("lookup", f"Order {order_id} not found", status_code=404)
        self.message = f"Order {order_id} not found"
        self.order_id = order_id
