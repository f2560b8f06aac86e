"""
Custom exceptions for the pet shop cart and checkout core.

Exception Hierarchy:
--------------------
PetShopException (base)
├── CartException
│   ├── EmptyCartException
│   └── InvalidOperationException
├── InventoryException
│   └── StaleInventoryException
├── CheckoutException
│   ├── CheckoutValidationException
│   ├── NotAuthenticatedException
│   └── InvalidCheckoutTransitionException
├── OrderException
│   └── OrderServiceException
│       └── OrderNotFoundException
└── ShopApiException

Usage:
------
Services raise specific exceptions:
    raise OrderNotFoundException(order_id="665f1c...")

The checkout orchestrator catches them and surfaces user-friendly messages:
    try:
        order = await self.order_service.create_order(draft, user)
    except OrderServiceException as e:
        self.error = handle_service_error(e)
"""

from .base import PetShopException
from .cart import CartException, EmptyCartException, InvalidOperationException
from .inventory import InventoryException, StaleInventoryException
from .checkout import (
    CheckoutException,
    CheckoutValidationException,
    NotAuthenticatedException,
    InvalidCheckoutTransitionException
)
from .order import OrderException, OrderServiceException, OrderNotFoundException
from .api import ShopApiException

__all__ = [
    # Base
    'PetShopException',

    # Cart
    'CartException',
    'EmptyCartException',
    'InvalidOperationException',

    # Inventory
    'InventoryException',
    'StaleInventoryException',

    # Checkout
    'CheckoutException',
    'CheckoutValidationException',
    'NotAuthenticatedException',
    'InvalidCheckoutTransitionException',

    # Order
    'OrderException',
    'OrderServiceException',
    'OrderNotFoundException',

    # Transport
    'ShopApiException',
]
