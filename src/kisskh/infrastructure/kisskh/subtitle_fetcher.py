"""Raw subtitle download (Cloudinary-hosted WebVTT files)."""

from __future__ import annotations

import httpx
import structlog

log = structlog.get_logger(__name__)


class HttpxSubtitleFetcher:
    """Implements ``SubtitleFetcherPort`` with the shared httpx client."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        timeout: float = 10.0,
    ) -> None:
        self._http = http_client
        self._timeout = timeout

    async def fetch_text(self, url: str) -> str | None:
        try:
            resp = await self._http.get(url, timeout=self._timeout)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            log.warning("subtitle_fetch_failed", url=url, error=str(exc))
            return None
        return resp.text
