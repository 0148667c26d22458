"""Cinemeta client: canonical title lookup for IMDb IDs (free, no API key).

``/meta/series/{id}.json`` is tried first, then ``/meta/movie/{id}.json``;
the first response carrying a ``meta.name`` wins.
"""

from __future__ import annotations

import re
from typing import Any

import httpx
import structlog

from kisskh.domain.entities.kisskh import TitleRecord

log = structlog.get_logger(__name__)

_META_PATH = "/meta/{media_type}/{imdb_id}.json"
_MEDIA_TYPES = ("series", "movie")
_YEAR_RANGE_RE = re.compile(r"[-–]")


def normalize_year(raw: Any) -> str | None:
    """Keep the first year of a range: ``"2019–2021"`` -> ``"2019"``."""
    if raw is None or raw == "":
        return None
    first = _YEAR_RANGE_RE.split(str(raw))[0].strip()
    return first or None


class CinemetaClient:
    """Implements ``MetadataClientPort`` against Stremio's Cinemeta addon."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str = "https://v3-cinemeta.strem.io",
        timeout: float = 10.0,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _fetch_meta(
        self, media_type: str, imdb_id: str
    ) -> dict[str, Any] | None:
        path = _META_PATH.format(media_type=media_type, imdb_id=imdb_id)
        url = f"{self._base_url}{path}"
        try:
            resp = await self._http.get(url, timeout=self._timeout)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError):
            log.debug(
                "cinemeta_lookup_failed",
                imdb_id=imdb_id,
                media_type=media_type,
                exc_info=True,
            )
            return None

        meta = data.get("meta") if isinstance(data, dict) else None
        if not isinstance(meta, dict) or not meta.get("name"):
            return None
        return meta

    async def get_title(self, imdb_id: str) -> TitleRecord | None:
        for media_type in _MEDIA_TYPES:
            meta = await self._fetch_meta(media_type, imdb_id)
            if meta is None:
                continue
            record = TitleRecord(
                name=str(meta["name"]),
                year=normalize_year(meta.get("year") or meta.get("releaseInfo")),
                imdb_id=imdb_id,
            )
            log.debug(
                "cinemeta_title_resolved",
                imdb_id=imdb_id,
                media_type=media_type,
                title=record.name,
                year=record.year,
            )
            return record

        log.warning("cinemeta_title_not_found", imdb_id=imdb_id)
        return None
