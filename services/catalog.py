import logging

import config
from enums.line_item_kind import LineItemKind
from enums.pet_status import PetStatus
from exceptions.api import ShopApiException
from services.cart import CartStore
from shop_api.ShopApiWrapper import ShopApiWrapper

logger = logging.getLogger(__name__)


class CatalogService:
    """Read-only access to products and pets. The server holds the current truth."""

    @staticmethod
    async def get_product(product_id: str) -> dict:
        return await ShopApiWrapper.fetch_api_request(
            f"{config.SHOP_API_URL}/products/{product_id}",
            headers=ShopApiWrapper.build_headers()
        )

    @staticmethod
    async def get_pet(pet_id: str) -> dict:
        return await ShopApiWrapper.fetch_api_request(
            f"{config.SHOP_API_URL}/pets/{pet_id}",
            headers=ShopApiWrapper.build_headers()
        )

    @staticmethod
    async def refresh_cart(cart: CartStore) -> int:
        """
        Refresh the cached stock and pet status of every cart line.

        Lines whose entity cannot be fetched keep their cached data; a 404
        marks the entity as gone (stock 0 / status sold) so the validator
        reports it.

        Args:
            cart: CartStore to refresh in place

        Returns:
            Number of lines refreshed
        """
        refreshed = 0
        for line in cart.products:
            try:
                product = await CatalogService.get_product(line.id)
                stock = product.get("stock")
            except ShopApiException as e:
                if e.status_code != 404:
                    logger.warning(f"Could not refresh product {line.id}: {e}")
                    continue
                stock = 0
            if stock is not None and cart.update_availability(line.id, LineItemKind.PRODUCT, available_stock=stock):
                refreshed += 1

        for line in cart.pets:
            try:
                pet = await CatalogService.get_pet(line.id)
                status = PetStatus(pet.get("status", PetStatus.AVAILABLE.value))
            except ShopApiException as e:
                if e.status_code != 404:
                    logger.warning(f"Could not refresh pet {line.id}: {e}")
                    continue
                status = PetStatus.SOLD
            except ValueError:
                logger.warning(f"Pet {line.id} has unknown status, keeping cached value")
                continue
            if cart.update_availability(line.id, LineItemKind.PET, status=status):
                refreshed += 1

        logger.info(f"Catalog refresh: {refreshed} cart line(s) updated")
        return refreshed
