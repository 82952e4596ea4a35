"""Simple in-memory TTL cache for upstream responses.

Note: Each uvicorn worker has its own cache instance, and two concurrent
misses on the same key will both reach the upstream API. Both are acceptable
at this scale; the cache only has to absorb repeated identical lookups.
"""

import time
from collections.abc import Callable
from typing import Any

DEFAULT_TTL_SECONDS = 600


def _key_part(value: Any) -> str:
    # Escape the separator so "a-1" + "x" and "a" + "1-x" stay distinct
    return str(value).replace("%", "%25").replace("-", "%2D")


def make_cache_key(endpoint: str, *parts: Any) -> str:
    """Build a deterministic key such as ``products-laptop-1-US-featured``."""
    return "-".join([endpoint, *(_key_part(p) for p in parts)])


class TTLCache:
    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        if key in self._store:
            expires_at, value = self._store[key]
            if self._clock() < expires_at:
                return value
            del self._store[key]
        return None

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        self._store[key] = (self._clock() + ttl, value)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
