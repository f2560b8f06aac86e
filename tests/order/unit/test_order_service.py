"""
Unit Tests: OrderService

Tests for services/order.py with the HTTP layer patched out:
- create_order() - POST body and response parsing
- update_order() - PUT with transaction id, 404 mapping
- get_order() / list_orders() / cancel_order()
"""

import json
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

import config

from enums.line_item_kind import LineItemKind
from enums.order_status import OrderStatus
from enums.payment_method import PaymentMethod
from exceptions import OrderNotFoundException, OrderServiceException, ShopApiException
from models.address import BillingFormDTO, ShippingFormDTO
from models.order import OrderDraftDTO
from services.order import OrderService

FETCH = 'shop_api.ShopApiWrapper.ShopApiWrapper.fetch_api_request'


@pytest.fixture
def draft(cart, product, pet):
    cart.add_item(product, LineItemKind.PRODUCT)
    cart.add_item(pet, LineItemKind.PET)
    shipping = ShippingFormDTO(
        first_name="Ayesha", last_name="Khan", email="ayesha@example.com",
        phone="0300-1234567", address="12 Mall Road", city="Lahore"
    )
    return OrderDraftDTO.from_cart(cart.snapshot(), shipping, BillingFormDTO(), PaymentMethod.EASYPAISA)


class TestCreateOrder:

    @pytest.mark.asyncio
    async def test_create_order_posts_payload(self, draft, user):
        response = {"_id": "665f1c:0", "status": "pending", "totalAmount": 6900, "paymentMethod": "easypaisa"}
        with patch(FETCH, new_callable=AsyncMock, return_value=response) as mock_fetch:
            order = await OrderService.create_order(draft, user)

        assert order.id == "665f1c"
        assert order.status == OrderStatus.PENDING
        assert order.total_amount == Decimal("6900")
        assert order.payment_method == PaymentMethod.EASYPAISA

        url = mock_fetch.await_args.args[0]
        kwargs = mock_fetch.await_args.kwargs
        assert url == f"{config.SHOP_API_URL}/orders"
        assert kwargs["method"] == "POST"
        assert kwargs["headers"]["Authorization"] == f"Bearer {user.token}"
        body = json.loads(kwargs["data"])
        assert body["products"] == [{"productId": "p-1", "quantity": 1}]
        assert body["pets"] == [{"petId": "pet-1", "quantity": 1}]
        assert body["paymentMethod"] == "easypaisa"
        assert "transactionId" not in body

    @pytest.mark.asyncio
    async def test_create_order_api_error(self, draft, user):
        error = ShopApiException("POST", f"{config.SHOP_API_URL}/orders", "Pet is no longer available", status_code=400)
        with patch(FETCH, new_callable=AsyncMock, side_effect=error):
            with pytest.raises(OrderServiceException) as exc_info:
                await OrderService.create_order(draft, user)

        assert exc_info.value.operation == "create"
        assert exc_info.value.reason == "Pet is no longer available"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_create_order_unexpected_response(self, draft, user):
        with patch(FETCH, new_callable=AsyncMock, return_value={"message": "ok"}):
            with pytest.raises(OrderServiceException) as exc_info:
                await OrderService.create_order(draft, user)

        assert exc_info.value.operation == "create"


class TestUpdateOrder:

    @pytest.mark.asyncio
    async def test_update_sends_transaction_id(self, user):
        response = {"_id": "o-1", "status": "pending", "transactionId": "TX-1"}
        with patch(FETCH, new_callable=AsyncMock, return_value=response) as mock_fetch:
            order = await OrderService.update_order("o-1", "TX-1", user)

        assert order.transaction_id == "TX-1"
        assert mock_fetch.await_args.args[0] == f"{config.SHOP_API_URL}/orders/o-1"
        assert mock_fetch.await_args.kwargs["method"] == "PUT"
        assert json.loads(mock_fetch.await_args.kwargs["data"]) == {"transactionId": "TX-1"}

    @pytest.mark.asyncio
    async def test_update_missing_order(self, user):
        error = ShopApiException("PUT", f"{config.SHOP_API_URL}/orders/o-404", "Order not found", status_code=404)
        with patch(FETCH, new_callable=AsyncMock, side_effect=error):
            with pytest.raises(OrderNotFoundException) as exc_info:
                await OrderService.update_order("o-404", "TX-1", user)

        assert exc_info.value.order_id == "o-404"

    @pytest.mark.asyncio
    async def test_update_transport_failure(self, user):
        error = ShopApiException("PUT", f"{config.SHOP_API_URL}/orders/o-1", "Request timed out")
        with patch(FETCH, new_callable=AsyncMock, side_effect=error):
            with pytest.raises(OrderServiceException) as exc_info:
                await OrderService.update_order("o-1", "TX-1", user)

        assert exc_info.value.operation == "update"
        assert exc_info.value.status_code is None


class TestOrderQueries:

    @pytest.mark.asyncio
    async def test_get_order(self, user):
        with patch(FETCH, new_callable=AsyncMock, return_value={"_id": "o-1", "status": "confirmed"}):
            order = await OrderService.get_order("o-1", user)

        assert order.status == OrderStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_list_orders_paginates(self, user):
        response = {"data": [{"_id": "o-1"}, {"_id": "o-2", "status": "delivered"}], "total": 14, "page": 2, "limit": 12}
        with patch(FETCH, new_callable=AsyncMock, return_value=response) as mock_fetch:
            page = await OrderService.list_orders(user, page=2)

        assert [order.id for order in page.data] == ["o-1", "o-2"]
        assert page.total == 14
        assert mock_fetch.await_args.kwargs["params"] == {"page": 2, "limit": 12}

    @pytest.mark.asyncio
    async def test_cancel_order(self, user):
        with patch(FETCH, new_callable=AsyncMock, return_value={"_id": "o-1", "status": "cancelled"}) as mock_fetch:
            order = await OrderService.cancel_order("o-1", user)

        assert order.status == OrderStatus.CANCELLED
        assert mock_fetch.await_args.args[0] == f"{config.SHOP_API_URL}/orders/o-1/cancel"
        assert mock_fetch.await_args.kwargs["method"] == "POST"
