from enum import Enum


class CartIssueType(str, Enum):
    INSUFFICIENT_STOCK = "insufficient_stock"
    PET_UNAVAILABLE = "pet_unavailable"
