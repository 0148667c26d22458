"""In-memory adapter - process-lifetime dict cache without eviction."""

from __future__ import annotations

from typing import Any, Optional

import structlog

log = structlog.get_logger(__name__)


class MemoryCacheAdapter:
    """CachePort implementation backed by a plain dict.

    Entries live until the process exits; there is
    no TTL and no size bound.  All access happens on the event loop thread,
    so no lock is taken.
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        log.info("memory_cache_adapter_init")

    # --- Context Manager ---
    async def __aenter__(self) -> MemoryCacheAdapter:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        log.info("memory_cache_closed", entries=len(self._data))

    # --- CachePort implementation ---
    async def get(self, key: str) -> Optional[Any]:
        value = self._data.get(key)
        log.debug("cache_get", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        log.debug("cache_set", key=key)
