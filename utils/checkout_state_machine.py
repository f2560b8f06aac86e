"""
Checkout State Machine for validating wizard step transitions.

This module declares which checkout actions are allowed from which step and
logs every transition that actually happens.
"""

import logging
from typing import Dict, List, Optional, Set, Tuple

from enums.checkout_step import CheckoutStep

logger = logging.getLogger(__name__)


class CheckoutTransition:
    """Represents a valid step transition triggered by a named action"""

    def __init__(self, from_step: CheckoutStep, action: str, to_step: CheckoutStep,
                 description: str = ""):
        self.from_step = from_step
        self.action = action
        self.to_step = to_step
        self.description = description

    def __repr__(self):
        return f"{self.from_step.value} --{self.action}--> {self.to_step.value}"


class CheckoutStateMachine:
    """
    Finite state machine for the checkout wizard.

    Valid transitions:
    - SHIPPING_INFO -> PAYMENT_SELECTION (next; form valid and pending order created)
    - PAYMENT_SELECTION -> REVIEW_AND_CONFIRM (next)
    - PAYMENT_SELECTION -> SHIPPING_INFO (back)
    - REVIEW_AND_CONFIRM -> PAYMENT_SELECTION (back)
    - REVIEW_AND_CONFIRM -> ORDER_PLACED (place_order for cash on delivery)
    - REVIEW_AND_CONFIRM -> ORDER_PLACED (confirm_transfer for bank transfers)

    ORDER_PLACED is final. There is no transition into the transfer
    confirmation from any step before REVIEW_AND_CONFIRM, and that step is
    only reachable after the pending order exists.
    """

    VALID_TRANSITIONS: List[CheckoutTransition] = [
        CheckoutTransition(
            CheckoutStep.SHIPPING_INFO, "next", CheckoutStep.PAYMENT_SELECTION,
            description="Shipping details accepted, pending order created"
        ),
        CheckoutTransition(
            CheckoutStep.PAYMENT_SELECTION, "next", CheckoutStep.REVIEW_AND_CONFIRM,
            description="Payment method chosen"
        ),
        CheckoutTransition(
            CheckoutStep.PAYMENT_SELECTION, "back", CheckoutStep.SHIPPING_INFO,
            description="Back to shipping details"
        ),
        CheckoutTransition(
            CheckoutStep.REVIEW_AND_CONFIRM, "back", CheckoutStep.PAYMENT_SELECTION,
            description="Back to payment selection"
        ),
        CheckoutTransition(
            CheckoutStep.REVIEW_AND_CONFIRM, "place_order", CheckoutStep.ORDER_PLACED,
            description="Cash on delivery order confirmed"
        ),
        CheckoutTransition(
            CheckoutStep.REVIEW_AND_CONFIRM, "confirm_transfer", CheckoutStep.ORDER_PLACED,
            description="Bank transfer transaction id submitted"
        ),
    ]

    # Build transition map for fast lookup
    _transition_map: Dict[Tuple[CheckoutStep, str], CheckoutStep] = {}
    _transition_descriptions: Dict[Tuple[CheckoutStep, str], str] = {}

    @classmethod
    def _build_transition_map(cls):
        """Build internal transition maps for performance"""
        if cls._transition_map:
            return  # Already built

        for transition in cls.VALID_TRANSITIONS:
            cls._transition_map[(transition.from_step, transition.action)] = transition.to_step
            cls._transition_descriptions[(transition.from_step, transition.action)] = transition.description

    @classmethod
    def target_step(cls, from_step: CheckoutStep, action: str) -> Optional[CheckoutStep]:
        """
        Get the step an action leads to.

        Args:
            from_step: Current checkout step
            action: Action name ("next", "back", "place_order", "confirm_transfer")

        Returns:
            Destination step, or None if the action is not allowed from from_step
        """
        cls._build_transition_map()
        return cls._transition_map.get((from_step, action))

    @classmethod
    def is_valid_action(cls, from_step: CheckoutStep, action: str) -> bool:
        return cls.target_step(from_step, action) is not None

    @classmethod
    def get_valid_actions(cls, from_step: CheckoutStep) -> Set[str]:
        cls._build_transition_map()
        return {action for (step, action) in cls._transition_map if step == from_step}

    @classmethod
    def is_final_step(cls, step: CheckoutStep) -> bool:
        return not cls.get_valid_actions(step)

    @classmethod
    def validate_and_log_transition(cls, from_step: CheckoutStep, action: str,
                                    user_id: Optional[str] = None,
                                    order_id: Optional[str] = None) -> Optional[CheckoutStep]:
        """
        Validate a checkout action and log the resulting transition.

        Returns:
            Destination step if the action is valid, None otherwise
        """
        to_step = cls.target_step(from_step, action)
        if to_step is None:
            logger.error(f"Invalid checkout action '{action}' in step {from_step.value} (user {user_id})")
            return None

        description = cls._transition_descriptions[(from_step, action)]
        order_ref = f" order {order_id}" if order_id else ""
        logger.info(f"CHECKOUT_TRANSITION: user {user_id}{order_ref} {from_step.value} -> {to_step.value}: {description}")
        return to_step
