import json
import logging

import config
from exceptions.api import ShopApiException
from exceptions.order import OrderNotFoundException, OrderServiceException
from models.order import OrderDTO, OrderDraftDTO, OrderPageDTO
from models.user import UserDTO
from shop_api.ShopApiWrapper import ShopApiWrapper

logger = logging.getLogger(__name__)


class OrderService:
    """
    Client for the remote order service.

    The service owns every order once created; this client only passes ids
    around. None of the calls retry on their own.
    """

    @staticmethod
    def _orders_url(suffix: str = "") -> str:
        return f"{config.SHOP_API_URL}/orders{suffix}"

    @staticmethod
    def _translate(e: ShopApiException, operation: str, order_id: str | None = None) -> OrderServiceException:
        if e.status_code == 404 and order_id is not None:
            return OrderNotFoundException(order_id)
        return OrderServiceException(operation, e.reason, status_code=e.status_code)

    @staticmethod
    async def create_order(draft: OrderDraftDTO, user: UserDTO) -> OrderDTO:
        """
        Create a pending order from a cart snapshot.

        Must be called at most once per checkout session: the server reserves
        stock and pets on creation.

        Raises:
            OrderServiceException: If the request fails or is rejected
        """
        try:
            response = await ShopApiWrapper.fetch_api_request(
                OrderService._orders_url(),
                method="POST",
                data=json.dumps(draft.to_payload()),
                headers=ShopApiWrapper.build_headers(user.token)
            )
            order = OrderDTO.model_validate(response)
        except ShopApiException as e:
            raise OrderService._translate(e, "create") from e
        except ValueError as e:
            raise OrderServiceException("create", f"unexpected response: {e}") from e
        logger.info(f"Order {order.id} created for user {user.id} ({len(draft.line_items)} lines)")
        return order

    @staticmethod
    async def update_order(order_id: str, transaction_id: str, user: UserDTO) -> OrderDTO:
        """
        Attach a bank-transfer transaction id to an existing order.

        Idempotent: sending the same transaction id again yields the same order.

        Raises:
            OrderNotFoundException: If the order does not exist
            OrderServiceException: If the request fails or is rejected
        """
        try:
            response = await ShopApiWrapper.fetch_api_request(
                OrderService._orders_url(f"/{order_id}"),
                method="PUT",
                data=json.dumps({"transactionId": transaction_id}),
                headers=ShopApiWrapper.build_headers(user.token)
            )
            order = OrderDTO.model_validate(response)
        except ShopApiException as e:
            raise OrderService._translate(e, "update", order_id) from e
        except ValueError as e:
            raise OrderServiceException("update", f"unexpected response: {e}") from e
        logger.info(f"Order {order_id} updated with transaction id")
        return order

    @staticmethod
    async def get_order(order_id: str, user: UserDTO) -> OrderDTO:
        try:
            response = await ShopApiWrapper.fetch_api_request(
                OrderService._orders_url(f"/{order_id}"),
                headers=ShopApiWrapper.build_headers(user.token)
            )
            return OrderDTO.model_validate(response)
        except ShopApiException as e:
            raise OrderService._translate(e, "lookup", order_id) from e
        except ValueError as e:
            raise OrderServiceException("lookup", f"unexpected response: {e}") from e

    @staticmethod
    async def list_orders(user: UserDTO, page: int = 1, limit: int = 12) -> OrderPageDTO:
        """Order history of the user, newest first (server-side ordering)."""
        try:
            response = await ShopApiWrapper.fetch_api_request(
                OrderService._orders_url(),
                params={"page": page, "limit": limit},
                headers=ShopApiWrapper.build_headers(user.token)
            )
            return OrderPageDTO.model_validate(response)
        except ShopApiException as e:
            raise OrderService._translate(e, "list") from e
        except ValueError as e:
            raise OrderServiceException("list", f"unexpected response: {e}") from e

    @staticmethod
    async def cancel_order(order_id: str, user: UserDTO) -> OrderDTO:
        """
        Cancel a pending or confirmed order. The server restores stock and
        pet availability and rejects other statuses.
        """
        try:
            response = await ShopApiWrapper.fetch_api_request(
                OrderService._orders_url(f"/{order_id}/cancel"),
                method="POST",
                headers=ShopApiWrapper.build_headers(user.token)
            )
            order = OrderDTO.model_validate(response)
        except ShopApiException as e:
            raise OrderService._translate(e, "cancel", order_id) from e
        except ValueError as e:
            raise OrderServiceException("cancel", f"unexpected response: {e}") from e
        logger.info(f"Order {order_id} cancelled by user {user.id}")
        return order
