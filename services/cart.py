import logging
from decimal import Decimal
from typing import Any

from pydantic import ValidationError
from sqlalchemy.orm import Session

import config
from enums.line_item_kind import LineItemKind
from enums.pet_status import PetStatus
from exceptions.cart import InvalidOperationException
from models.cart_line_item import CartLineItemDTO, CartSnapshotDTO
from models.pricing import CartTotalsDTO
from repositories.storage import StorageRepository
from services.pricing import PricingService

logger = logging.getLogger(__name__)


class CartStore:
    """
    Client-side cart of products and adoptable pets.

    One store per session, passed explicitly to whoever needs it. The store
    is the single owner of cart persistence: every mutating call writes the
    whole cart to client storage before returning, and the constructor
    restores it.

    Mutations do not raise for normal usage. Out-of-range quantities are
    clamped and refused adds are reported through the returned message key.
    The one hard rejection is changing a pet line's quantity away from 1
    (InvalidOperationException).
    """

    def __init__(self, session: Session, storage_key: str | None = None):
        self.session = session
        self.storage_key = storage_key or config.CART_STORAGE_KEY
        self._products: list[CartLineItemDTO] = []
        self._pets: list[CartLineItemDTO] = []
        self._restore()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _restore(self) -> None:
        raw = StorageRepository.get(self.storage_key, self.session)
        if raw is None:
            return
        try:
            snapshot = CartSnapshotDTO.model_validate_json(raw)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Discarding corrupt cart in storage key '{self.storage_key}': {e}")
            StorageRepository.delete(self.storage_key, self.session)
            return
        self._products = snapshot.products
        self._pets = snapshot.pets
        logger.debug(f"Cart restored: {len(self._products)} products, {len(self._pets)} pets")

    def _persist(self) -> None:
        StorageRepository.set(self.storage_key, self.snapshot().model_dump_json(), self.session)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _collection(self, kind: LineItemKind) -> list[CartLineItemDTO]:
        return self._products if kind == LineItemKind.PRODUCT else self._pets

    def _find(self, item_id: str, kind: LineItemKind) -> CartLineItemDTO | None:
        item_id = str(item_id)
        return next((line for line in self._collection(kind) if line.id == item_id), None)

    def add_item(self, entity: Any, kind: LineItemKind) -> tuple[bool, str, dict]:
        """
        Add a catalog entity to the cart.

        Products already in the cart get +1, capped at their available stock.
        Pets already in the cart are left alone (adding the same pet twice is
        a no-op).

        Args:
            entity: Catalog record of the product or pet (mapping or object)
            kind: LineItemKind of the entity

        Returns:
            (changed, message_key, format_args)
            - changed: Whether the cart was modified
            - message_key: Localization key for the toast
            - format_args: Dict with format arguments for the message

        Raises:
            InvalidOperationException: If the record has no id or price
        """
        try:
            candidate = CartLineItemDTO.from_entity(entity, kind)
        except (ValidationError, ValueError) as e:
            raise InvalidOperationException(item_id="unknown", reason=str(e)) from e

        name = candidate.display_name or candidate.id
        existing = self._find(candidate.id, kind)

        if existing is not None:
            if not kind.is_stackable:
                return False, "cart_pet_already_added", {"name": name}
            if existing.quantity >= existing.available_stock:
                return False, "cart_stock_limit_reached", {"name": name, "available": existing.available_stock}
            existing.quantity += 1
            self._persist()
            return True, "cart_quantity_increased", {"name": name, "quantity": existing.quantity}

        if kind == LineItemKind.PET and candidate.status != PetStatus.AVAILABLE:
            return False, "cart_pet_unavailable", {"name": name}
        if kind == LineItemKind.PRODUCT and candidate.available_stock < 1:
            return False, "cart_out_of_stock", {"name": name}

        self._collection(kind).append(candidate)
        self._persist()
        logger.info(f"Cart: added {kind.value} {candidate.id}")
        return True, "cart_item_added", {"name": name}

    def remove_item(self, item_id: str, kind: LineItemKind) -> bool:
        line = self._find(item_id, kind)
        if line is None:
            return False
        self._collection(kind).remove(line)
        self._persist()
        logger.info(f"Cart: removed {kind.value} {line.id}")
        return True

    def set_quantity(self, item_id: str, kind: LineItemKind, new_quantity: int) -> CartLineItemDTO | None:
        """
        Set the quantity of a product line.

        Quantities below 1 remove the line. Larger quantities are clamped to
        the line's available stock.

        Returns:
            The updated line, or None if the line is absent or was removed

        Raises:
            InvalidOperationException: If kind is PET and new_quantity != 1
        """
        if kind == LineItemKind.PET:
            if new_quantity != 1:
                raise InvalidOperationException(item_id=str(item_id), reason="pet quantity is always 1")
            return self._find(item_id, kind)

        line = self._find(item_id, kind)
        if line is None:
            return None
        if new_quantity < 1:
            self.remove_item(item_id, kind)
            return None

        clamped = min(new_quantity, line.available_stock)
        if clamped < 1:
            # Stock dropped to zero since the line was added; keep it so the
            # validator can report it.
            clamped = 1
        if clamped != line.quantity:
            line.quantity = clamped
            self._persist()
        return line

    def update_availability(
        self,
        item_id: str,
        kind: LineItemKind,
        available_stock: int | None = None,
        status: PetStatus | None = None
    ) -> bool:
        """Refresh the cached stock/status of a line. Quantities are not touched."""
        line = self._find(item_id, kind)
        if line is None:
            return False
        if kind == LineItemKind.PET and status is not None:
            line.status = status
            line.available_stock = 1 if status == PetStatus.AVAILABLE else 0
        elif kind == LineItemKind.PRODUCT and available_stock is not None:
            line.available_stock = max(int(available_stock), 0)
        else:
            return False
        self._persist()
        return True

    def clear(self) -> None:
        self._products = []
        self._pets = []
        StorageRepository.delete(self.storage_key, self.session)
        logger.info("Cart cleared")

    # ------------------------------------------------------------------
    # Reads (always recomputed)
    # ------------------------------------------------------------------

    @property
    def products(self) -> list[CartLineItemDTO]:
        return [line.model_copy() for line in self._products]

    @property
    def pets(self) -> list[CartLineItemDTO]:
        return [line.model_copy() for line in self._pets]

    def lines(self) -> list[CartLineItemDTO]:
        return [*self.products, *self.pets]

    def get_line(self, item_id: str, kind: LineItemKind) -> CartLineItemDTO | None:
        line = self._find(item_id, kind)
        return line.model_copy() if line is not None else None

    def snapshot(self) -> CartSnapshotDTO:
        return CartSnapshotDTO(
            products=[line.model_copy(deep=True) for line in self._products],
            pets=[line.model_copy(deep=True) for line in self._pets],
        )

    def is_empty(self) -> bool:
        return not self._products and not self._pets

    def item_count(self) -> int:
        return sum(line.quantity for line in self._products) + len(self._pets)

    def subtotal(self) -> Decimal:
        return PricingService.calculate_subtotal(self._products + self._pets)

    def tax(self) -> Decimal:
        return PricingService.calculate_tax(self.subtotal())

    def shipping(self) -> Decimal:
        return PricingService.calculate_shipping(self.subtotal())

    def total(self) -> Decimal:
        return self.totals().total

    def totals(self) -> CartTotalsDTO:
        return PricingService.calculate_totals(self._products + self._pets)
