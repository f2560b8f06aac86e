from decimal import Decimal

import config
from models.cart_line_item import CartLineItemDTO
from models.pricing import CartTotalsDTO


class PricingService:
    """Service for cart amount calculations (subtotal, tax, shipping, total)."""

    @staticmethod
    def calculate_subtotal(lines: list[CartLineItemDTO]) -> Decimal:
        return sum((line.unit_price * line.quantity for line in lines), Decimal("0"))

    @staticmethod
    def calculate_tax(subtotal: Decimal) -> Decimal:
        return subtotal * config.TAX_RATE

    @staticmethod
    def calculate_shipping(subtotal: Decimal) -> Decimal:
        """
        Flat shipping fee, waived once the subtotal is strictly above the threshold.

        Example with threshold 100 and fee 10:
            subtotal 100 -> 10
            subtotal 100.01 -> 0
        """
        if subtotal > config.FREE_SHIPPING_THRESHOLD:
            return Decimal("0")
        return config.FLAT_SHIPPING_FEE

    @staticmethod
    def calculate_totals(lines: list[CartLineItemDTO]) -> CartTotalsDTO:
        """
        Calculate all derived cart amounts in one pass.

        Args:
            lines: Product and pet lines of the cart

        Returns:
            CartTotalsDTO where total = subtotal + tax + shipping
        """
        subtotal = PricingService.calculate_subtotal(lines)
        tax = PricingService.calculate_tax(subtotal)
        shipping = PricingService.calculate_shipping(subtotal)
        return CartTotalsDTO(
            subtotal=subtotal,
            tax=tax,
            shipping=shipping,
            total=subtotal + tax + shipping,
        )
