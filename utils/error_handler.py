"""
Error Handler Utility for cart and checkout actions

Provides centralized error handling with:
- Localized error messages
- Automatic exception to message mapping
- Logging for debugging

Usage:
    from utils.error_handler import handle_service_error

    try:
        order = await OrderService.create_order(draft, user)
    except PetShopException as e:
        self.error = handle_service_error(e)
"""

import logging

from enums.text_entity import TextEntity
from exceptions import (
    PetShopException,
    EmptyCartException,
    InvalidOperationException,
    StaleInventoryException,
    CheckoutValidationException,
    NotAuthenticatedException,
    InvalidCheckoutTransitionException,
    OrderServiceException,
    OrderNotFoundException,
    ShopApiException,
)
from utils.localizator import Localizator


def handle_service_error(exception: PetShopException, entity: TextEntity = TextEntity.USER) -> str:
    """
    Convert service exception to localized user-friendly error message.

    Args:
        exception: The custom exception raised by a service
        entity: Text entity for localization

    Returns:
        Localized error message string
    """
    # Log the error for debugging
    logging.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    # Map exception types to localization keys
    error_mapping = {
        # Cart exceptions
        EmptyCartException: "error_empty_cart",
        InvalidOperationException: "error_invalid_operation",

        # Inventory exceptions
        StaleInventoryException: "error_stale_inventory",

        # Checkout exceptions
        CheckoutValidationException: "error_required_fields",
        NotAuthenticatedException: "error_login_required",
        InvalidCheckoutTransitionException: "error_invalid_checkout_step",

        # Order exceptions
        OrderNotFoundException: "error_order_not_found",

        # Transport
        ShopApiException: "error_api",
    }

    # Get localization key for this exception type
    localization_key = error_mapping.get(type(exception))
    if localization_key is None and isinstance(exception, OrderServiceException):
        localization_key = f"error_order_{exception.operation}_failed"

    if not localization_key:
        # Unknown exception type - use generic error message
        logging.error(f"Unmapped exception type: {type(exception).__name__}")
        return Localizator.get_text(entity, "error_unexpected")

    # Get exception attributes for formatting
    exception_data = {}

    # Extract common attributes from exceptions
    if hasattr(exception, 'order_id'):
        exception_data['order_id'] = exception.order_id
    if hasattr(exception, 'item_id'):
        exception_data['item_id'] = exception.item_id
    if hasattr(exception, 'reason'):
        exception_data['reason'] = exception.reason
    if hasattr(exception, 'issues'):
        exception_data['issue_count'] = len(exception.issues)
    if hasattr(exception, 'current_step'):
        exception_data['current_step'] = exception.current_step
    if hasattr(exception, 'details'):
        exception_data['details'] = exception.details

    # Get localized message with formatting
    try:
        return Localizator.get_text(entity, localization_key).format(**exception_data)
    except KeyError as e:
        # Missing formatting parameter or key - log and fall back
        logging.error(f"Missing localization data for {localization_key}: {e}")
        return Localizator.get_text(entity, "error_unexpected")


def handle_unexpected_error(exception: Exception, entity: TextEntity = TextEntity.USER) -> str:
    """
    Handle unexpected exceptions (non-PetShopException).

    Note:
        Also logs the full exception for debugging
    """
    logging.error(f"Unexpected error: {type(exception).__name__} - {str(exception)}", exc_info=True)
    return Localizator.get_text(entity, "error_unexpected")
