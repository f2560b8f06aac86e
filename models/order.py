from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from enums.line_item_kind import LineItemKind
from enums.order_status import OrderStatus
from enums.payment_method import PaymentMethod
from models.address import AddressDTO, BillingFormDTO, ShippingFormDTO
from models.cart_line_item import CartLineItemDTO, CartSnapshotDTO


class OrderDraftDTO(BaseModel):
    """
    Order as submitted to the order service.

    line_items is a deep copy of the cart at submission time, so clearing or
    editing the cart afterwards does not affect the draft.
    """
    line_items: list[CartLineItemDTO]
    shipping_address: AddressDTO
    billing_address: AddressDTO
    payment_method: PaymentMethod
    notes: str | None = None
    transaction_id: str | None = None

    @classmethod
    def from_cart(
        cls,
        snapshot: CartSnapshotDTO,
        shipping: ShippingFormDTO,
        billing: BillingFormDTO,
        payment_method: PaymentMethod,
        transaction_id: str | None = None
    ) -> 'OrderDraftDTO':
        return cls(
            line_items=[line.model_copy(deep=True) for line in snapshot.all_lines()],
            shipping_address=shipping.to_address(),
            billing_address=billing.to_address(shipping),
            payment_method=payment_method,
            notes=f"Order placed by {shipping.first_name} {shipping.last_name}",
            transaction_id=transaction_id,
        )

    def to_payload(self) -> dict:
        """Build the JSON body for POST /orders."""
        payload = {
            "products": [
                {"productId": line.id, "quantity": line.quantity}
                for line in self.line_items if line.kind == LineItemKind.PRODUCT
            ],
            "pets": [
                {"petId": line.id, "quantity": 1}
                for line in self.line_items if line.kind == LineItemKind.PET
            ],
            "shippingAddress": self.shipping_address.model_dump(by_alias=True),
            "billingAddress": self.billing_address.model_dump(by_alias=True),
            "paymentMethod": self.payment_method.value,
            "notes": self.notes,
        }
        # Transaction id only makes sense for the bank-transfer rails
        if self.payment_method.is_bank_transfer and self.transaction_id:
            payload["transactionId"] = self.transaction_id
        return payload


class OrderDTO(BaseModel):
    """Order as returned by the order service. The server owns this state."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: str = Field(alias="_id")
    status: OrderStatus = OrderStatus.PENDING
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    shipping: Decimal | None = None
    total_amount: Decimal | None = Field(default=None, alias="totalAmount")
    payment_method: PaymentMethod | None = Field(default=None, alias="paymentMethod")
    transaction_id: str | None = Field(default=None, alias="transactionId")

    @field_validator('id', mode='before')
    @classmethod
    def clean_id(cls, v):
        """
        Normalize order id.

        Some backends return ids with a ":<suffix>" tail (e.g. "665f...:0");
        only the part before the colon addresses the order.
        """
        if v is None:
            return v
        return str(v).split(':')[0]


class OrderPageDTO(BaseModel):
    """One page of the user's order history."""
    data: list[OrderDTO] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 12
