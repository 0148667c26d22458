"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from kisskh.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from kisskh.application.use_cases import (
        EpisodeResolver,
        StremioStreamUseCase,
        StremioSubtitlesUseCase,
    )
    from kisskh.domain.ports import (
        CachePort,
        FeedClientPort,
        KissKHSitePort,
        MetadataClientPort,
        SubtitleFetcherPort,
    )
    from kisskh.infrastructure.persistence.subtitle_cache import SubtitleCache


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    cache: CachePort
    http_client: httpx.AsyncClient

    # Upstream clients
    metadata_client: MetadataClientPort
    site_client: KissKHSitePort
    feed_client: FeedClientPort
    subtitle_fetcher: SubtitleFetcherPort

    # Process-wide subtitle track cache
    subtitle_cache: SubtitleCache

    # Application services
    resolver: EpisodeResolver
    stremio_stream_uc: StremioStreamUseCase
    stremio_subtitles_uc: StremioSubtitlesUseCase
