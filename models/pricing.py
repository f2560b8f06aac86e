from decimal import Decimal

from pydantic import BaseModel


class CartTotalsDTO(BaseModel):
    """Derived cart amounts. Computed on demand, never persisted."""
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
