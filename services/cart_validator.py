import logging

from enums.cart_issue_type import CartIssueType
from enums.pet_status import PetStatus
from exceptions.cart import EmptyCartException
from exceptions.inventory import StaleInventoryException
from models.cart_issue import CartIssueDTO
from models.cart_line_item import CartSnapshotDTO
from services.cart import CartStore

logger = logging.getLogger(__name__)


class CartValidator:
    """
    Gate between the cart view and checkout.

    Interprets the stock/status data cached on each line. It never fetches
    fresh data itself (see CatalogService.refresh_cart) and never repairs a
    line: the user has to adjust or remove it.
    """

    @staticmethod
    def validate(cart: CartStore | CartSnapshotDTO) -> list[CartIssueDTO]:
        """
        Find every line that blocks checkout.

        Args:
            cart: CartStore or a snapshot of one

        Returns:
            List of issues, empty when the cart is clean
        """
        snapshot = cart.snapshot() if isinstance(cart, CartStore) else cart
        issues = []

        for line in snapshot.products:
            if line.quantity > line.available_stock:
                issues.append(CartIssueDTO(
                    item_id=line.id,
                    kind=line.kind,
                    issue=CartIssueType.INSUFFICIENT_STOCK,
                    display_name=line.display_name,
                    requested=line.quantity,
                    available=line.available_stock,
                ))

        for line in snapshot.pets:
            if line.status != PetStatus.AVAILABLE:
                issues.append(CartIssueDTO(
                    item_id=line.id,
                    kind=line.kind,
                    issue=CartIssueType.PET_UNAVAILABLE,
                    display_name=line.display_name,
                    status=line.status.value if line.status else None,
                ))

        if issues:
            logger.info(f"Cart validation found {len(issues)} issue(s)")
        return issues

    @staticmethod
    def ensure_checkout_ready(cart: CartStore | CartSnapshotDTO) -> None:
        """
        Raise if the cart cannot enter checkout.

        Raises:
            EmptyCartException: If the cart has no lines
            StaleInventoryException: If validate() reports issues
        """
        snapshot = cart.snapshot() if isinstance(cart, CartStore) else cart
        if not snapshot.all_lines():
            raise EmptyCartException()
        issues = CartValidator.validate(snapshot)
        if issues:
            raise StaleInventoryException(issues)
