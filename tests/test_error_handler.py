"""
Tests for Error Handler Utility

Tests the centralized error handling system that converts
custom exceptions to localized user-friendly messages.
"""

from unittest.mock import patch

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
from utils.error_handler import handle_service_error, handle_unexpected_error


class TestErrorHandler:
    """Test error handling utility"""

    @patch('utils.error_handler.Localizator')
    def test_order_not_found_exception(self, mock_localizator):
        """Test OrderNotFoundException handling"""
        mock_localizator.get_text.return_value = "Order {order_id} not found"

        result = handle_service_error(OrderNotFoundException(order_id="o-404"), TextEntity.USER)

        mock_localizator.get_text.assert_called_with(TextEntity.USER, "error_order_not_found")
        assert result == "Order o-404 not found"

    @patch('utils.error_handler.Localizator')
    def test_order_service_exception_uses_operation_key(self, mock_localizator):
        mock_localizator.get_text.return_value = "Failed: {reason}"

        result = handle_service_error(OrderServiceException("update", "Service unavailable", status_code=503))

        mock_localizator.get_text.assert_called_with(TextEntity.USER, "error_order_update_failed")
        assert result == "Failed: Service unavailable"

    def test_create_failure_real_text(self):
        result = handle_service_error(OrderServiceException("create", "Insufficient stock for Dog Food"))

        assert result == "Failed to create order: Insufficient stock for Dog Food"

    def test_empty_cart(self):
        assert handle_service_error(EmptyCartException()) == "Your cart is empty"

    def test_invalid_operation(self):
        result = handle_service_error(InvalidOperationException(item_id="pet-1", reason="pet quantity is always 1"))

        assert result == "This change is not allowed: pet quantity is always 1"

    def test_stale_inventory_counts_issues(self):
        result = handle_service_error(StaleInventoryException(issues=["a", "b"]))

        assert result.startswith("2 item(s)")

    def test_checkout_exceptions(self):
        assert handle_service_error(CheckoutValidationException({"city": "City is required"})) == \
            "Please fill in all required fields"
        assert handle_service_error(NotAuthenticatedException()) == "Please log in to checkout"
        assert handle_service_error(InvalidCheckoutTransitionException("SHIPPING_INFO", "place_order")) == \
            "This action is not available right now"

    def test_api_exception(self):
        result = handle_service_error(ShopApiException("GET", "http://x", "Request timed out"))

        assert result == "Request failed: Request timed out"

    def test_unmapped_exception(self):
        result = handle_service_error(PetShopException("something odd"))

        assert result == "Something went wrong. Please try again."

    @patch('utils.error_handler.Localizator')
    def test_missing_format_parameter_falls_back(self, mock_localizator):
        mock_localizator.get_text.side_effect = ["Broken {unknown_field}", "fallback"]

        result = handle_service_error(EmptyCartException())

        assert result == "fallback"

    def test_unexpected_error(self):
        assert handle_unexpected_error(RuntimeError("boom")) == "Something went wrong. Please try again."
