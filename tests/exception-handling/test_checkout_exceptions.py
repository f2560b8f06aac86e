"""
Tests for the exception hierarchy raised by cart, checkout and order code.
"""

import pytest

from exceptions import (
    PetShopException,
    CartException,
    EmptyCartException,
    InvalidOperationException,
    InventoryException,
    StaleInventoryException,
    CheckoutException,
    CheckoutValidationException,
    InvalidCheckoutTransitionException,
    OrderException,
    OrderServiceException,
    OrderNotFoundException,
)


class TestHierarchy:

    @pytest.mark.parametrize("exc,parent", [
        (EmptyCartException(), CartException),
        (InvalidOperationException("pet-1", "pet quantity is always 1"), CartException),
        (StaleInventoryException([]), InventoryException),
        (CheckoutValidationException({"city": "City is required"}), CheckoutException),
        (InvalidCheckoutTransitionException("SHIPPING_INFO", "back"), CheckoutException),
        (OrderServiceException("create", "boom"), OrderException),
        (OrderNotFoundException("o-1"), OrderServiceException),
    ])
    def test_parents(self, exc, parent):
        assert isinstance(exc, parent)
        assert isinstance(exc, PetShopException)


class TestAttributes:

    def test_order_not_found(self):
        exc = OrderNotFoundException(order_id="o-999")

        assert exc.order_id == "o-999"
        assert exc.status_code == 404
        assert str(exc) == "Order o-999 not found"

    def test_order_service_exception(self):
        exc = OrderServiceException("update", "Service unavailable", status_code=503)

        assert exc.details == {"operation": "update", "status_code": 503}
        assert "update" in str(exc)

    def test_invalid_operation(self):
        exc = InvalidOperationException(item_id="pet-1", reason="pet quantity is always 1")

        assert exc.details == {"item_id": "pet-1", "reason": "pet quantity is always 1"}
        assert "pet-1" in repr(exc)

    def test_checkout_validation_keeps_field_errors(self):
        errors = {"phone": "Phone is required", "city": "City is required"}
        exc = CheckoutValidationException(errors)

        assert exc.field_errors == errors
        assert "phone, city" in str(exc)

    def test_stale_inventory_keeps_issues(self):
        exc = StaleInventoryException(issues=["a", "b", "c"])

        assert exc.issues == ["a", "b", "c"]
        assert exc.details["issue_count"] == 3
