from enum import Enum


class CheckoutStep(str, Enum):
    SHIPPING_INFO = "SHIPPING_INFO"
    PAYMENT_SELECTION = "PAYMENT_SELECTION"
    REVIEW_AND_CONFIRM = "REVIEW_AND_CONFIRM"
    ORDER_PLACED = "ORDER_PLACED"           # Terminal
