from pydantic import BaseModel

from enums.checkout_step import CheckoutStep
from enums.payment_method import PaymentMethod
from models.address import ShippingFormDTO
from models.cart_line_item import CartLineItemDTO
from models.pricing import CartTotalsDTO


class CheckoutSummaryDTO(BaseModel):
    """Everything the review step displays."""
    step: CheckoutStep
    lines: list[CartLineItemDTO]
    totals: CartTotalsDTO
    shipping: ShippingFormDTO
    payment_method: PaymentMethod
    order_id: str | None = None
    transfer_form_open: bool = False
