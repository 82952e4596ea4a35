"""RapidAPI product-data client (amazon-product-data8).

Responses are returned as parsed JSON without any shape checks; the proxy
passes them through to its callers untouched.
"""

import logging
from typing import Any

import httpx

from errors import UpstreamError

logger = logging.getLogger(__name__)

SEARCH_PATH = "/product-by-text"
DETAIL_PATH = "/product-detail"
REVIEW_PATH = "/product-review"


class RapidAPIClient:
    """Issues authenticated GETs against the upstream product-data API.

    Credentials are fixed at construction and sent on every call as the
    ``x-rapidapi-host`` / ``x-rapidapi-key`` headers.
    """

    def __init__(
        self,
        host: str,
        api_key: str | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.host = host
        self.base_url = f"https://{host}"
        self._headers = {
            "x-rapidapi-host": host,
            "x-rapidapi-key": api_key or "",
        }
        self._transport = transport

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        # InvalidURL is not an HTTPError; a malformed RAPIDAPI_HOST raises it here
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                transport=self._transport,
            ) as client:
                resp = await client.get(path, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("RapidAPI request to %s failed: %s", path, e)
            raise UpstreamError(str(e) or type(e).__name__) from e

        if not resp.is_success:
            logger.warning("RapidAPI %s returned %d", path, resp.status_code)
            raise UpstreamError(
                f"Request failed with status code {resp.status_code}",
                upstream_status=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from upstream: {e}", upstream_status=resp.status_code) from e

    async def search_products(self, keyword: str, page: int, country: str, sort_by: str) -> Any:
        return await self._get(
            SEARCH_PATH,
            {"keyword": keyword, "page": page, "country": country, "sort_by": sort_by},
        )

    async def get_product_details(self, asin: str, country: str) -> Any:
        return await self._get(DETAIL_PATH, {"asin": asin, "country": country})

    async def get_product_reviews(self, asin: str, page: int, country: str) -> Any:
        return await self._get(REVIEW_PATH, {"asin": asin, "page": page, "country": country})
