import logging

from enums.notification_level import NotificationLevel
from enums.text_entity import TextEntity
from models.notification import NotificationDTO
from utils.localizator import Localizator

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Toast surface for cart and checkout messages.

    Messages are queued here and drained by the UI layer, which decides how
    to render them.
    """

    def __init__(self):
        self._pending: list[NotificationDTO] = []

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> NotificationDTO:
        notification = NotificationDTO(message=message, level=level)
        self._pending.append(notification)
        log_level = logging.WARNING if level == NotificationLevel.ERROR else logging.INFO
        logger.log(log_level, f"Notify [{level.value}]: {message}")
        return notification

    def notify_key(self, key: str, level: NotificationLevel = NotificationLevel.INFO,
                   **format_args) -> NotificationDTO:
        text = Localizator.get_text(TextEntity.USER, key).format(**format_args)
        return self.notify(text, level)

    def notify_cart_result(self, result: tuple[bool, str, dict]) -> NotificationDTO:
        """Turn a CartStore.add_item() result into a toast."""
        changed, message_key, format_args = result
        level = NotificationLevel.SUCCESS if changed else NotificationLevel.WARNING
        return self.notify_key(message_key, level, **format_args)

    def notify_item_removed(self, removed: bool) -> NotificationDTO | None:
        """Toast for CartStore.remove_item(). Nothing is sent when no line was removed."""
        if not removed:
            return None
        return self.notify_key("cart_item_removed", NotificationLevel.INFO)

    def notify_cart_cleared(self) -> NotificationDTO:
        return self.notify_key("cart_cleared", NotificationLevel.INFO)

    def notify_cart_issues(self, issues: list) -> NotificationDTO | None:
        """
        Warn about a cart that failed validation.

        The per-line messages stay on the issues themselves; this is the
        single summary toast shown above them.
        """
        if not issues:
            return None
        return self.notify_key("cart_has_issues", NotificationLevel.WARNING)

    @property
    def pending(self) -> list[NotificationDTO]:
        return list(self._pending)

    def drain(self) -> list[NotificationDTO]:
        drained, self._pending = self._pending, []
        return drained
