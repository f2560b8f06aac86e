import asyncio
import logging
from decimal import Decimal

from enums.checkout_step import CheckoutStep
from enums.notification_level import NotificationLevel
from enums.payment_method import PaymentMethod
from enums.text_entity import TextEntity
from exceptions import (
    PetShopException,
    EmptyCartException,
    StaleInventoryException,
    CheckoutValidationException,
    NotAuthenticatedException,
    InvalidCheckoutTransitionException,
)
from models.address import BillingFormDTO, ShippingFormDTO
from models.checkout import CheckoutSummaryDTO
from models.order import OrderDTO, OrderDraftDTO
from models.user import UserDTO
from services.cart import CartStore
from services.cart_validator import CartValidator
from services.notification import NotificationService
from services.order import OrderService
from services.pricing import PricingService
from utils.checkout_state_machine import CheckoutStateMachine
from utils.currency import format_pkr
from utils.error_handler import handle_service_error, handle_unexpected_error
from utils.localizator import Localizator

logger = logging.getLogger(__name__)


class CheckoutOrchestrator:
    """
    Three-step checkout wizard: shipping info, payment selection, review.

    Flow:
    1. SHIPPING_INFO: required fields are checked locally. On the first
       successful Next of the session a pending order is created on the
       order service from a snapshot of the cart.
    2. PAYMENT_SELECTION: choose cash on delivery or a bank-transfer rail.
    3. REVIEW_AND_CONFIRM:
       - cash on delivery: place_order() finalizes immediately
       - bank transfer: open_transfer_form(), set_transaction_id(),
         confirm_transfer() attaches the id to the pending order
    Finalizing clears the cart and ends in ORDER_PLACED.

    Opening a checkout requires a user and a cart that passes
    CartValidator.ensure_checkout_ready(): EmptyCartException or
    StaleInventoryException is raised otherwise. The same check runs again
    before the pending order is created.

    Remote failures never escape: they end up in ``error`` (and the
    notifier) and the step is left unchanged so the same action can be
    retried. Anything else the order service raises is reported with the
    generic error message in the same way. Calling an action that the
    current step does not allow raises InvalidCheckoutTransitionException.

    An abandoned checkout leaves its pending order on the server. Nothing
    here cancels it.
    """

    def __init__(
        self,
        cart: CartStore,
        user: UserDTO | None,
        order_service=OrderService,
        notifier: NotificationService | None = None
    ):
        if user is None:
            raise NotAuthenticatedException()
        try:
            CartValidator.ensure_checkout_ready(cart)
        except StaleInventoryException as e:
            if notifier is not None:
                notifier.notify_cart_issues(e.issues)
            raise

        self.cart = cart
        self.user = user
        self.order_service = order_service
        self.notifier = notifier

        self.step = CheckoutStep.SHIPPING_INFO
        self.shipping_form = ShippingFormDTO(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email
        )
        self.billing_form = BillingFormDTO()
        self.payment_method = PaymentMethod.default()
        self.transaction_id = ""
        self.transfer_form_open = False

        self.order_id: str | None = None
        self.order: OrderDTO | None = None
        self.order_draft: OrderDraftDTO | None = None
        self.placed_total: Decimal | None = None

        self.error: str | None = None
        self.field_errors: dict[str, str] = {}
        self.abandoned = False
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    @property
    def can_confirm_transfer(self) -> bool:
        return (
            self.step == CheckoutStep.REVIEW_AND_CONFIRM
            and self.payment_method.is_bank_transfer
            and self.transfer_form_open
            and bool(self.transaction_id.strip())
            and self.order_id is not None
            and not self.is_busy
        )

    def _require(self, action: str) -> None:
        if not CheckoutStateMachine.is_valid_action(self.step, action):
            raise InvalidCheckoutTransitionException(self.step.value, action)

    def _require_step(self, action: str, *steps: CheckoutStep) -> None:
        if self.step not in steps:
            raise InvalidCheckoutTransitionException(self.step.value, action)

    def _move(self, action: str) -> None:
        self.step = CheckoutStateMachine.validate_and_log_transition(
            self.step, action, user_id=self.user.id, order_id=self.order_id
        )

    def _fail(self, e: Exception) -> None:
        if isinstance(e, PetShopException):
            self.error = handle_service_error(e)
        else:
            self.error = handle_unexpected_error(e)
        if self.notifier is not None:
            self.notifier.notify(self.error, NotificationLevel.ERROR)

    def _ignore_if_busy(self, action: str) -> bool:
        if self.is_busy:
            logger.warning(f"Checkout action '{action}' ignored: request in flight (user {self.user.id})")
            return True
        return False

    # ------------------------------------------------------------------
    # Form state (kept across Back/Next)
    # ------------------------------------------------------------------

    @staticmethod
    def _merge(form, fields: dict):
        unknown = set(fields) - set(type(form).model_fields)
        if unknown:
            raise ValueError(f"Unknown {type(form).__name__} field(s): {', '.join(sorted(unknown))}")
        return type(form).model_validate({**form.model_dump(), **fields})

    def update_shipping(self, **fields) -> ShippingFormDTO:
        self._require_step("update_shipping", CheckoutStep.SHIPPING_INFO)
        self.shipping_form = self._merge(self.shipping_form, fields)
        for name in fields:
            self.field_errors.pop(name, None)
        return self.shipping_form

    def update_billing(self, **fields) -> BillingFormDTO:
        self._require_step("update_billing", CheckoutStep.SHIPPING_INFO)
        self.billing_form = self._merge(self.billing_form, fields)
        for name in fields:
            self.field_errors.pop(f"billing_{name}", None)
        return self.billing_form

    def select_payment_method(self, method: PaymentMethod | str) -> PaymentMethod:
        self._require_step("select_payment_method", CheckoutStep.PAYMENT_SELECTION)
        method = PaymentMethod(method)
        if method != self.payment_method:
            self.payment_method = method
            self.transfer_form_open = False
        return self.payment_method

    def open_transfer_form(self) -> None:
        self._require_step("open_transfer_form", CheckoutStep.REVIEW_AND_CONFIRM)
        if not self.payment_method.is_bank_transfer:
            raise InvalidCheckoutTransitionException(self.step.value, "open_transfer_form")
        self.transfer_form_open = True

    def set_transaction_id(self, transaction_id: str) -> None:
        self._require_step("set_transaction_id", CheckoutStep.REVIEW_AND_CONFIRM)
        if not self.transfer_form_open:
            raise InvalidCheckoutTransitionException(self.step.value, "set_transaction_id")
        self.transaction_id = transaction_id
        if transaction_id.strip():
            self.field_errors.pop("transaction_id", None)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _validate_shipping(self) -> bool:
        errors = {**self.shipping_form.missing_fields(), **self.billing_form.missing_fields()}
        if errors:
            self.field_errors = errors
            self.error = handle_service_error(CheckoutValidationException(errors))
            return False
        self.field_errors = {}
        return True

    async def _create_pending_order(self) -> bool:
        # The cart may have changed since the checkout was opened
        try:
            CartValidator.ensure_checkout_ready(self.cart)
        except (EmptyCartException, StaleInventoryException) as e:
            self._fail(e)
            return False

        draft = OrderDraftDTO.from_cart(
            self.cart.snapshot(), self.shipping_form, self.billing_form, self.payment_method
        )
        try:
            order = await self.order_service.create_order(draft, self.user)
        except PetShopException as e:
            logger.error(f"Pending order creation failed for user {self.user.id}: {e}")
            self._fail(e)
            return False
        except Exception as e:
            logger.error(f"Unexpected error creating pending order for user {self.user.id}: {e}")
            self._fail(e)
            return False

        if self.abandoned:
            logger.info(f"Checkout abandoned, ignoring created order {order.id}")
            return False

        self.order = order
        self.order_id = order.id
        self.order_draft = draft
        return True

    async def next(self) -> CheckoutStep:
        """
        Advance one step.

        Returns:
            The step after the call (unchanged on validation or remote failure)
        """
        self._require("next")
        if self._ignore_if_busy("next"):
            return self.step

        async with self._lock:
            if self.step == CheckoutStep.SHIPPING_INFO:
                if not self._validate_shipping():
                    return self.step
                if self.order_id is None and not await self._create_pending_order():
                    return self.step
            if self.abandoned:
                return self.step
            self.error = None
            self._move("next")
        return self.step

    def back(self) -> CheckoutStep:
        """
        Go back one step. Entered form data, payment choice and transaction id
        are kept.

        Ignored (the current step is returned) while a request is in flight,
        so the in-flight result always lands on the step that started it.
        """
        self._require("back")
        if self._ignore_if_busy("back"):
            return self.step
        self.error = None
        self._move("back")
        return self.step

    def _finalize(self, action: str) -> None:
        self.placed_total = self.cart.total()
        self.cart.clear()
        self.error = None
        self._move(action)
        logger.info(f"Order {self.order_id} placed by user {self.user.id} via {self.payment_method.label}, total {format_pkr(self.placed_total)}")
        if self.notifier is not None:
            self.notifier.notify_key("order_placed", NotificationLevel.SUCCESS)

    async def place_order(self) -> CheckoutStep:
        """Finalize a cash-on-delivery order. No external proof of payment is needed."""
        self._require("place_order")
        if self.payment_method != PaymentMethod.CASH_ON_DELIVERY:
            raise InvalidCheckoutTransitionException(self.step.value, "place_order")
        if self._ignore_if_busy("place_order"):
            return self.step
        if self.abandoned:
            logger.info(f"Checkout abandoned, not placing order {self.order_id}")
            return self.step

        async with self._lock:
            self._finalize("place_order")
        return self.step

    async def confirm_transfer(self) -> CheckoutStep:
        """
        Submit the bank-transfer transaction id and finalize the order.

        The update is keyed by order id and idempotent, so a failed attempt
        can simply be repeated. The cart is only cleared after the update
        succeeds.
        """
        self._require("confirm_transfer")
        if not self.payment_method.is_bank_transfer or not self.transfer_form_open or self.order_id is None:
            raise InvalidCheckoutTransitionException(self.step.value, "confirm_transfer")
        if self._ignore_if_busy("confirm_transfer"):
            return self.step

        transaction_id = self.transaction_id.strip()
        if not transaction_id:
            message = Localizator.get_text(TextEntity.USER, "error_transaction_id_required")
            self.field_errors = {"transaction_id": message}
            self.error = message
            return self.step

        async with self._lock:
            try:
                order = await self.order_service.update_order(self.order_id, transaction_id, self.user)
            except PetShopException as e:
                logger.error(f"Transaction id update failed for order {self.order_id}: {e}")
                self._fail(e)
                return self.step
            except Exception as e:
                logger.error(f"Unexpected error updating order {self.order_id}: {e}")
                self._fail(e)
                return self.step

            if self.abandoned:
                logger.info(f"Checkout abandoned, ignoring update of order {self.order_id}")
                return self.step

            self.order = order
            self._finalize("confirm_transfer")
        return self.step

    def abandon(self) -> None:
        """
        Leave the checkout. Results of requests still in flight are ignored.

        A pending order created by this session stays on the server.
        """
        self.abandoned = True
        if self.order_id is not None and self.step != CheckoutStep.ORDER_PLACED:
            logger.warning(f"Checkout abandoned with pending order {self.order_id} (user {self.user.id})")

    def summary(self) -> CheckoutSummaryDTO:
        if self.step == CheckoutStep.ORDER_PLACED and self.order_draft is not None:
            lines = [line.model_copy() for line in self.order_draft.line_items]
        else:
            lines = self.cart.lines()
        return CheckoutSummaryDTO(
            step=self.step,
            lines=lines,
            totals=PricingService.calculate_totals(lines),
            shipping=self.shipping_form,
            payment_method=self.payment_method,
            order_id=self.order_id,
            transfer_form_open=self.transfer_form_open,
        )
