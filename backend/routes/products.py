"""Product routes: cached passthrough to the RapidAPI product-data API.

GET /products                 → /product-by-text
GET /product-details/{asin}   → /product-detail
GET /product-reviews/{asin}   → /product-review

Every handler follows the same path: build a cache key from the request
parameters, serve a hit directly, otherwise fetch, store and return.
Failed upstream calls raise UpstreamError and are never cached.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Depends, Query

from dependencies import get_cache, get_rapidapi
from errors import MissingParameterError
from services.cache import TTLCache, make_cache_key
from services.rapidapi import RapidAPIClient

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_COUNTRY = "US"
DEFAULT_SORT = "featured"


async def _cached(cache: TTLCache, key: str, fetch: Callable[[], Awaitable[Any]]) -> Any:
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit: %s", key)
        return cached

    logger.debug("Cache miss: %s", key)
    result = await fetch()
    cache.set(key, result)
    return result


@router.get("/products")
async def search_products(
    keyword: str | None = Query(None),
    page: int = Query(1, ge=1),
    country: str = Query(DEFAULT_COUNTRY),
    sort_by: str = Query(DEFAULT_SORT),
    cache: TTLCache = Depends(get_cache),
    client: RapidAPIClient = Depends(get_rapidapi),
) -> Any:
    """Search products by free text."""
    if not keyword:
        raise MissingParameterError("Keyword")

    key = make_cache_key("products", keyword, page, country, sort_by)
    return await _cached(
        cache, key, lambda: client.search_products(keyword, page, country, sort_by)
    )


@router.get("/product-details/{asin}")
async def product_details(
    asin: str,
    country: str = Query(DEFAULT_COUNTRY),
    cache: TTLCache = Depends(get_cache),
    client: RapidAPIClient = Depends(get_rapidapi),
) -> Any:
    key = make_cache_key("details", asin, country)
    return await _cached(cache, key, lambda: client.get_product_details(asin, country))


@router.get("/product-reviews/{asin}")
async def product_reviews(
    asin: str,
    page: int = Query(1, ge=1),
    country: str = Query(DEFAULT_COUNTRY),
    cache: TTLCache = Depends(get_cache),
    client: RapidAPIClient = Depends(get_rapidapi),
) -> Any:
    key = make_cache_key("reviews", asin, page, country)
    return await _cached(cache, key, lambda: client.get_product_reviews(asin, page, country))
