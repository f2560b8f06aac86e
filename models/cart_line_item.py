# A cart line is a client-side snapshot of a catalog entity at add-time.
# Price and stock are NOT authoritative: the order service recomputes prices
# and re-checks stock when the order is created.
from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator, model_validator

import config
from enums.line_item_kind import LineItemKind
from enums.pet_status import PetStatus


def _pick(entity: Any, *names: str) -> Any:
    """Return the first non-None attribute/key of entity among names."""
    for name in names:
        if isinstance(entity, Mapping):
            value = entity.get(name)
        else:
            value = getattr(entity, name, None)
        if value is not None:
            return value
    return None


class CartLineItemDTO(BaseModel):
    id: str
    kind: LineItemKind
    unit_price: Decimal = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    available_stock: int = Field(ge=0)
    display_name: str = ""
    image_ref: str | None = None
    status: PetStatus | None = None  # Pets only: cached availability

    @model_validator(mode='after')
    def validate_pet_is_single(self) -> 'CartLineItemDTO':
        if self.kind == LineItemKind.PET and self.quantity != 1:
            raise ValueError(f"Pet line {self.id} must have quantity 1, got {self.quantity}")
        return self

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @classmethod
    def from_entity(cls, entity: Any, kind: LineItemKind) -> 'CartLineItemDTO':
        """
        Build a normalized line item from a catalog record.

        Catalog records come in several shapes (``_id`` or ``id``,
        ``pricePKR`` or ``price``, ``stock`` or ``available_stock``).
        This is the only place where those variants are coalesced.

        Args:
            entity: Mapping or object describing a product or a pet
            kind: LineItemKind of the entity

        Returns:
            CartLineItemDTO with quantity 1

        Raises:
            ValueError: If the record has no id or no price
        """
        entity_id = _pick(entity, "_id", "id")
        if entity_id is None or str(entity_id).strip() == "":
            raise ValueError("catalog entity has no id")

        price = _pick(entity, "pricePKR", "price_pkr", "unit_price", "price")
        if price is None:
            raise ValueError(f"catalog entity {entity_id} has no price")

        images = _pick(entity, "images")
        image_ref = images[0] if images else _pick(entity, "image", "image_ref", "imageRef")

        if kind == LineItemKind.PET:
            status = PetStatus(_pick(entity, "status") or PetStatus.AVAILABLE.value)
            available_stock = 1 if status == PetStatus.AVAILABLE else 0
        else:
            status = None
            stock = _pick(entity, "stock", "available_stock", "availableStock")
            available_stock = int(stock) if stock is not None else config.DEFAULT_AVAILABLE_STOCK

        return cls(
            id=str(entity_id),
            kind=kind,
            unit_price=Decimal(str(price)),
            quantity=1,
            available_stock=max(available_stock, 0),
            display_name=_pick(entity, "name", "display_name", "displayName") or "",
            image_ref=image_ref,
            status=status,
        )


class CartSnapshotDTO(BaseModel):
    """Full cart as persisted to client storage."""
    products: list[CartLineItemDTO] = Field(default_factory=list)
    pets: list[CartLineItemDTO] = Field(default_factory=list)

    @field_validator('products')
    @classmethod
    def validate_products(cls, v: list[CartLineItemDTO]) -> list[CartLineItemDTO]:
        return cls._validate_collection(v, LineItemKind.PRODUCT)

    @field_validator('pets')
    @classmethod
    def validate_pets(cls, v: list[CartLineItemDTO]) -> list[CartLineItemDTO]:
        return cls._validate_collection(v, LineItemKind.PET)

    @staticmethod
    def _validate_collection(lines: list[CartLineItemDTO], kind: LineItemKind) -> list[CartLineItemDTO]:
        seen = set()
        for line in lines:
            if line.kind != kind:
                raise ValueError(f"{line.kind.value} line {line.id} stored among {kind.value}s")
            if line.id in seen:
                raise ValueError(f"duplicate {kind.value} line {line.id}")
            seen.add(line.id)
        return lines

    def all_lines(self) -> list[CartLineItemDTO]:
        return [*self.products, *self.pets]
