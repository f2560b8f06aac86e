"""
Unit Tests: NotificationService toast queue
"""

from enums.line_item_kind import LineItemKind
from enums.notification_level import NotificationLevel
from enums.pet_status import PetStatus
from services.cart_validator import CartValidator
from services.notification import NotificationService


class TestNotificationService:

    def test_notify_queues_message(self):
        notifier = NotificationService()

        notifier.notify("Hello", NotificationLevel.INFO)

        assert [n.message for n in notifier.pending] == ["Hello"]

    def test_notify_key_formats_text(self):
        notifier = NotificationService()

        notification = notifier.notify_key("cart_item_added", NotificationLevel.SUCCESS, name="Milo")

        assert notification.message == "Milo added to cart"
        assert notification.level == NotificationLevel.SUCCESS

    def test_cart_result_levels(self, cart, pet):
        notifier = NotificationService()

        added = notifier.notify_cart_result(cart.add_item(pet, LineItemKind.PET))
        duplicate = notifier.notify_cart_result(cart.add_item(pet, LineItemKind.PET))

        assert added.level == NotificationLevel.SUCCESS
        assert duplicate.level == NotificationLevel.WARNING
        assert duplicate.message == "Milo is already in your cart"

    def test_item_removed_toast(self, cart, product):
        notifier = NotificationService()
        cart.add_item(product, LineItemKind.PRODUCT)

        removed = notifier.notify_item_removed(cart.remove_item("p-1", LineItemKind.PRODUCT))
        missing = notifier.notify_item_removed(cart.remove_item("p-1", LineItemKind.PRODUCT))

        assert removed.message == "Item removed from cart"
        assert removed.level == NotificationLevel.INFO
        assert missing is None
        assert len(notifier.pending) == 1

    def test_cart_cleared_toast(self, cart, product):
        notifier = NotificationService()
        cart.add_item(product, LineItemKind.PRODUCT)
        cart.clear()

        notification = notifier.notify_cart_cleared()

        assert notification.message == "Cart cleared"
        assert notification.level == NotificationLevel.INFO

    def test_cart_issues_toast(self, cart, pet):
        notifier = NotificationService()
        cart.add_item(pet, LineItemKind.PET)
        assert notifier.notify_cart_issues(CartValidator.validate(cart)) is None

        cart.update_availability("pet-1", LineItemKind.PET, status=PetStatus.SOLD)
        notification = notifier.notify_cart_issues(CartValidator.validate(cart))

        assert notification.message == "Some items in your cart have issues"
        assert notification.level == NotificationLevel.WARNING

    def test_drain_empties_queue(self):
        notifier = NotificationService()
        notifier.notify("one")
        notifier.notify("two")

        drained = notifier.drain()

        assert [n.message for n in drained] == ["one", "two"]
        assert notifier.pending == []
