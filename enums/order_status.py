from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"        # Created at checkout, waiting for confirmation
    CONFIRMED = "confirmed"    # Accepted by the back office
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
