"""Subtitle cache backed by CachePort (in-memory by default)."""

from __future__ import annotations

import json

import structlog

from kisskh.domain.entities.stremio import SubtitleTrack
from kisskh.domain.ports.cache import CachePort

log = structlog.get_logger(__name__)


def _serialize_tracks(tracks: list[SubtitleTrack]) -> str:
    """Serialize SubtitleTracks to a JSON string."""
    return json.dumps(
        [
            {
                "id": t.id,
                "url": t.url,
                "label": t.label,
                "language_code": t.language_code,
            }
            for t in tracks
        ]
    )


def _deserialize_tracks(data: str) -> list[SubtitleTrack]:
    """Deserialize SubtitleTracks from a JSON string."""
    return [
        SubtitleTrack(
            id=d["id"],
            url=d["url"],
            label=d.get("label", ""),
            language_code=d.get("language_code", "spa"),
        )
        for d in json.loads(data)
    ]


class SubtitleCache:
    """Resolved subtitle tracks keyed by ``{title}-{episode}``.

    Entries are never invalidated.  Empty track lists are not stored, so a
    failed resolution is retried on the next request.
    """

    def __init__(self, storage: CachePort) -> None:
        self.storage = storage

    @staticmethod
    def key_for(name: str, episode: int) -> str:
        return f"{name}-{episode}"

    async def get(self, key: str) -> list[SubtitleTrack] | None:
        data = await self.storage.get(f"subtitles:{key}")
        if data is None:
            return None

        try:
            tracks = _deserialize_tracks(data)
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            log.error("subtitle_cache_deserialize_error", key=key, error=str(e))
            return None
        log.debug("subtitle_cache_hit", key=key, count=len(tracks))
        return tracks

    async def set(self, key: str, tracks: list[SubtitleTrack]) -> None:
        if not tracks:
            return
        await self.storage.set(f"subtitles:{key}", _serialize_tracks(tracks))
        log.debug("subtitle_cache_saved", key=key, count=len(tracks))
