from enum import Enum


class LineItemKind(str, Enum):
    """
    Kind of catalog entity behind a cart line.

    Products are fungible and stack by quantity. Pets are unique animals:
    a pet line always has quantity 1 and is never merged with another line.
    """

    PRODUCT = "product"
    PET = "pet"

    @property
    def is_stackable(self) -> bool:
        return self == LineItemKind.PRODUCT
