from enum import Enum


class PaymentMethod(str, Enum):
    """
    Payment methods offered at checkout.

    EASYPAISA and JAZZCASH are manual bank-transfer rails: the buyer pays
    outside the shop and supplies the transaction id. Both are handled the
    same way and only differ by label.
    """

    EASYPAISA = "easypaisa"
    JAZZCASH = "jazzcash"
    CASH_ON_DELIVERY = "cashondelivery"

    @property
    def is_bank_transfer(self) -> bool:
        return self in (PaymentMethod.EASYPAISA, PaymentMethod.JAZZCASH)

    @property
    def label(self) -> str:
        return {
            PaymentMethod.EASYPAISA: "EasyPaisa",
            PaymentMethod.JAZZCASH: "JazzCash",
            PaymentMethod.CASH_ON_DELIVERY: "Cash on Delivery",
        }[self]

    @classmethod
    def default(cls) -> 'PaymentMethod':
        return cls.EASYPAISA
