from pydantic import BaseModel

from enums.cart_issue_type import CartIssueType
from enums.line_item_kind import LineItemKind


class CartIssueDTO(BaseModel):
    """One cart line that blocks checkout until the user fixes it."""
    item_id: str
    kind: LineItemKind
    issue: CartIssueType
    display_name: str = ""
    requested: int | None = None
    available: int | None = None
    status: str | None = None

    @property
    def message(self) -> str:
        name = self.display_name or self.item_id
        if self.issue == CartIssueType.INSUFFICIENT_STOCK:
            return f"Only {self.available} of {name} available, {self.requested} in cart"
        return f"{name} is no longer available ({self.status})"
