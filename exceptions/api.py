"""
Shop API transport exceptions.
"""

from .base import PetShopException


class ShopApiException(PetShopException):
    """
    Raised by ShopApiWrapper for non-2xx responses and transport failures.

    status_code is None when no HTTP response was received.
    """

    def __init__(self, method: str, url: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"{method} {url} failed: {reason}",
            details={'method': method, 'url': url, 'status_code': status_code}
        )
        self.method = method
        self.url = url
        self.reason = reason
        self.status_code = status_code
