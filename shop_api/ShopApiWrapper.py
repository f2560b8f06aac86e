import asyncio
import logging

from aiohttp import ClientSession, ClientTimeout, ClientError, ContentTypeError

import config
from exceptions.api import ShopApiException

logger = logging.getLogger(__name__)


class ShopApiWrapper:

    @staticmethod
    def build_headers(token: str | None = None) -> dict:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    async def fetch_api_request(
        url: str,
        method: str = "GET",
        params: dict | None = None,
        data: str | None = None,
        headers: dict | None = None
    ) -> dict:
        """
        Perform one request against the shop backend and return the JSON body.

        No retries: callers decide whether an operation may be repeated.

        Raises:
            ShopApiException: On non-2xx status, invalid JSON or transport failure
        """
        timeout = ClientTimeout(total=config.SHOP_API_TIMEOUT_SECONDS)
        try:
            async with ClientSession(timeout=timeout) as session:
                async with session.request(method, url, params=params, data=data, headers=headers) as response:
                    try:
                        body = await response.json()
                    except (ContentTypeError, ValueError):
                        body = {}
                    if not response.ok:
                        message = body.get("message") if isinstance(body, dict) else None
                        logger.error(f"API error: {method} {url} -> {response.status} {message}")
                        raise ShopApiException(
                            method, url,
                            message or response.reason or "Something went wrong",
                            status_code=response.status
                        )
                    return body
        except asyncio.TimeoutError as e:
            raise ShopApiException(method, url, "Request timed out") from e
        except ClientError as e:
            raise ShopApiException(method, url, str(e) or type(e).__name__) from e
