"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

import functools
from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from kisskh.application.use_cases import (
    EpisodeResolver,
    StremioStreamUseCase,
    StremioSubtitlesUseCase,
)
from kisskh.infrastructure.cache import MemoryCacheAdapter
from kisskh.infrastructure.kisskh import (
    BloggerFeedClient,
    HttpxSubtitleFetcher,
    KissKHSiteClient,
    extract_config_identifiers,
    extract_episode_media,
    extract_post_id,
    repair_spanish_text,
    to_vtt_data_uri,
)
from kisskh.infrastructure.kisskh.site_client import select_show
from kisskh.infrastructure.metadata.cinemeta import CinemetaClient
from kisskh.infrastructure.persistence.subtitle_cache import SubtitleCache
from kisskh.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Cache (required by the subtitle cache)
        2. HTTP Client (required by every upstream client)
        3. Upstream clients (Cinemeta, KissKH site, Blogger feed, subtitles)
        4. Resolver chain
        5. Stremio use cases
    """
    state = cast(AppState, app.state)
    config = state.config
    kisskh = config.kisskh

    # 1) Cache (process-wide, in-memory)
    cache = MemoryCacheAdapter()
    await cache.__aenter__()
    state.cache = cache
    state.subtitle_cache = SubtitleCache(cache)
    log.info("cache_initialized", backend="memory")

    # 2) Shared HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 3) Upstream clients
    state.metadata_client = CinemetaClient(
        http_client=state.http_client,
        base_url=kisskh.metadata_url,
        timeout=kisskh.metadata_timeout_seconds,
    )
    state.site_client = KissKHSiteClient(
        http_client=state.http_client,
        base_url=kisskh.base_url,
        server=kisskh.server,
        timeout=config.http_timeout_seconds,
    )
    state.feed_client = BloggerFeedClient(
        http_client=state.http_client,
        timeout=kisskh.feed_timeout_seconds,
    )
    state.subtitle_fetcher = HttpxSubtitleFetcher(
        http_client=state.http_client,
        timeout=kisskh.subtitle_timeout_seconds,
    )
    log.info("upstream_clients_initialized", base_url=kisskh.base_url)

    # 4) Resolver chain (shared by both use cases)
    state.resolver = EpisodeResolver(
        metadata=state.metadata_client,
        site=state.site_client,
        feed=state.feed_client,
        select_fn=select_show,
        post_id_fn=extract_post_id,
        blog_ids_fn=functools.partial(
            extract_config_identifiers,
            defaults=tuple(kisskh.default_blog_ids),
        ),
    )

    # 5) Stremio use cases
    state.stremio_stream_uc = StremioStreamUseCase(
        resolver=state.resolver,
        extract_fn=extract_episode_media,
        stream_title=kisskh.stream_title,
    )
    state.stremio_subtitles_uc = StremioSubtitlesUseCase(
        resolver=state.resolver,
        cache=state.subtitle_cache,
        fetcher=state.subtitle_fetcher,
        extract_fn=extract_episode_media,
        repair_fn=repair_spanish_text,
        encode_fn=to_vtt_data_uri,
        label=kisskh.subtitle_label,
        max_concurrent=kisskh.subtitle_concurrency,
    )

    log.info("app_startup_complete")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        await state.cache.aclose()
        log.info("cache_closed")

        log.info("app_shutdown_complete")
