"""
Unit Tests: CartStore persistence

Every mutation is written to client storage before the call returns, and a
new store on the same storage sees exactly the same cart.
"""

import json

from enums.line_item_kind import LineItemKind
from enums.pet_status import PetStatus
from repositories.storage import StorageRepository
from services.cart import CartStore


class TestCartPersistence:

    def test_restore_after_restart(self, session, product, pet):
        cart = CartStore(session)
        cart.add_item(product, LineItemKind.PRODUCT)
        cart.set_quantity("p-1", LineItemKind.PRODUCT, 3)
        cart.add_item(pet, LineItemKind.PET)

        restored = CartStore(session)

        assert restored.snapshot() == cart.snapshot()
        assert restored.get_line("p-1", LineItemKind.PRODUCT).quantity == 3
        assert restored.get_line("pet-1", LineItemKind.PET).status == PetStatus.AVAILABLE
        assert restored.total() == cart.total()

    def test_storage_holds_both_collections(self, session, product, pet):
        cart = CartStore(session)
        cart.add_item(product, LineItemKind.PRODUCT)
        cart.add_item(pet, LineItemKind.PET)

        stored = json.loads(StorageRepository.get("cart", session))

        assert [line["id"] for line in stored["products"]] == ["p-1"]
        assert [line["id"] for line in stored["pets"]] == ["pet-1"]

    def test_removal_is_persisted(self, session, product):
        cart = CartStore(session)
        cart.add_item(product, LineItemKind.PRODUCT)
        cart.remove_item("p-1", LineItemKind.PRODUCT)

        assert CartStore(session).is_empty()

    def test_clear_removes_storage_entry(self, session, product):
        cart = CartStore(session)
        cart.add_item(product, LineItemKind.PRODUCT)

        cart.clear()

        assert StorageRepository.get("cart", session) is None
        assert CartStore(session).is_empty()

    def test_refused_add_does_not_write(self, session, product):
        product["stock"] = 0
        cart = CartStore(session)

        cart.add_item(product, LineItemKind.PRODUCT)

        assert StorageRepository.get("cart", session) is None

    def test_corrupt_storage_starts_empty(self, session):
        StorageRepository.set("cart", "{not json", session)

        cart = CartStore(session)

        assert cart.is_empty()
        assert StorageRepository.get("cart", session) is None

    def test_invalid_lines_discarded(self, session):
        """A stored pet with quantity 2 breaks the line invariant."""
        StorageRepository.set("cart", json.dumps({
            "products": [],
            "pets": [{
                "id": "pet-1", "kind": "pet", "unit_price": "5000",
                "quantity": 2, "available_stock": 1, "status": "available"
            }]
        }), session)

        cart = CartStore(session)

        assert cart.is_empty()

    def test_duplicate_lines_discarded(self, session):
        line = {"id": "p-1", "kind": "product", "unit_price": "10", "quantity": 1, "available_stock": 5}
        StorageRepository.set("cart", json.dumps({"products": [line, line], "pets": []}), session)

        assert CartStore(session).is_empty()
