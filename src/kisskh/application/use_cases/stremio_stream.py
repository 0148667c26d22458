"""Stremio stream use case: one direct KissKH video link per episode."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from kisskh.application.use_cases.episode_resolver import EpisodeResolver
from kisskh.domain.entities.kisskh import EpisodeMedia
from kisskh.domain.entities.stremio import StremioRequest, StremioStream

_ExtractFn = Callable[[str, int], EpisodeMedia]

log = structlog.get_logger(__name__)


class StremioStreamUseCase:
    """Resolves at most one playable stream for a Stremio request."""

    def __init__(
        self,
        *,
        resolver: EpisodeResolver,
        extract_fn: _ExtractFn,
        stream_title: str = "KissKH 720p",
    ) -> None:
        self._resolver = resolver
        self._extract = extract_fn
        self._stream_title = stream_title

    async def execute(self, request: StremioRequest) -> list[StremioStream]:
        """Return ``[stream]`` or ``[]``; never raises."""
        try:
            resolved = await self._resolver.resolve(request.imdb_id, request.episode)
            if resolved is None:
                return []

            media = self._extract(resolved.feed_content, request.episode)
        except Exception:
            log.warning(
                "stremio_stream_failed",
                imdb_id=request.imdb_id,
                episode=request.episode,
                exc_info=True,
            )
            return []

        if media.video_url is None:
            log.info(
                "stremio_stream_no_video",
                imdb_id=request.imdb_id,
                episode=request.episode,
            )
            return []

        log.info(
            "stremio_stream_resolved",
            imdb_id=request.imdb_id,
            episode=request.episode,
            url=media.video_url,
        )
        return [StremioStream(url=media.video_url, title=self._stream_title)]
