"""Stremio subtitles use case.

IMDb ID -> title -> cache lookup -> resolver chain -> subtitle URLs
-> fetch + repair + inline as data URIs -> cache.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol

import structlog

from kisskh.application.use_cases.episode_resolver import EpisodeResolver
from kisskh.domain.entities.kisskh import EpisodeMedia
from kisskh.domain.entities.stremio import StremioRequest, SubtitleTrack
from kisskh.domain.ports.kisskh_site import SubtitleFetcherPort


class _SubtitleCache(Protocol):
    """Process-wide store of resolved tracks keyed by title and episode."""

    def key_for(self, name: str, episode: int) -> str: ...

    async def get(self, key: str) -> list[SubtitleTrack] | None: ...

    async def set(self, key: str, tracks: list[SubtitleTrack]) -> None: ...


# Type aliases for injected pure functions.
_ExtractFn = Callable[[str, int], EpisodeMedia]
_TextFn = Callable[[str], str]

log = structlog.get_logger(__name__)


class StremioSubtitlesUseCase:
    """Resolves the Spanish subtitle tracks for a Stremio request."""

    def __init__(
        self,
        *,
        resolver: EpisodeResolver,
        cache: _SubtitleCache,
        fetcher: SubtitleFetcherPort,
        extract_fn: _ExtractFn,
        repair_fn: _TextFn,
        encode_fn: _TextFn,
        label: str = "Spanish (KissKH)",
        language_code: str = "spa",
        max_concurrent: int = 3,
    ) -> None:
        self._resolver = resolver
        self._cache = cache
        self._fetcher = fetcher
        self._extract = extract_fn
        self._repair = repair_fn
        self._encode = encode_fn
        self._label = label
        self._language_code = language_code
        self._max_concurrent = max(1, max_concurrent)

    async def execute(self, request: StremioRequest) -> list[SubtitleTrack]:
        """Return the tracks (possibly empty); never raises."""
        try:
            return await self._execute(request)
        except Exception:
            log.warning(
                "stremio_subtitles_failed",
                imdb_id=request.imdb_id,
                episode=request.episode,
                exc_info=True,
            )
            return []

    async def _execute(self, request: StremioRequest) -> list[SubtitleTrack]:
        title = await self._resolver.lookup_title(request.imdb_id)
        if title is None:
            return []

        key = self._cache.key_for(title.name, request.episode)
        cached = await self._cache.get(key)
        if cached is not None:
            log.info("stremio_subtitles_cache_hit", key=key, count=len(cached))
            return cached

        resolved = await self._resolver.resolve_feed(title, request.episode)
        if resolved is None:
            return []

        media = self._extract(resolved.feed_content, request.episode)
        if not media.subtitle_urls:
            log.info(
                "stremio_subtitles_none_found",
                title=title.name,
                episode=request.episode,
            )
            return []

        tracks = await self._build_tracks(media.subtitle_urls)
        await self._cache.set(key, tracks)

        log.info(
            "stremio_subtitles_resolved",
            title=title.name,
            episode=request.episode,
            count=len(tracks),
            inlined=sum(1 for t in tracks if t.url != t.id),
        )
        return tracks

    async def _build_tracks(self, urls: list[str]) -> list[SubtitleTrack]:
        """Fetch and inline every URL; ``gather`` keeps the input order."""
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def _bounded(url: str) -> SubtitleTrack:
            async with semaphore:
                return await self._build_track(url)

        return list(await asyncio.gather(*(_bounded(u) for u in urls)))

    async def _build_track(self, url: str) -> SubtitleTrack:
        """Inline one subtitle; fall back to the remote URL on failure."""
        inline = url
        try:
            text = await self._fetcher.fetch_text(url)
            if text is not None:
                inline = self._encode(self._repair(text))
        except Exception:
            log.warning("subtitle_inline_failed", url=url, exc_info=True)

        return SubtitleTrack(
            id=url,
            url=inline,
            label=self._label,
            language_code=self._language_code,
        )
