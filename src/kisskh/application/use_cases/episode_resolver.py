"""Resolver chain shared by the stream and subtitles use cases.

IMDb ID -> Cinemeta title -> KissKH search/match -> episode pattern
-> episode page -> post ID + blog IDs -> Blogger feed content.

Every stage is an early exit: a miss anywhere yields ``None`` and nothing
partial is surfaced.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from kisskh.domain.entities.kisskh import (
    Extraction,
    ResolvedEpisode,
    SearchResult,
    TitleRecord,
)
from kisskh.domain.ports.kisskh_site import FeedClientPort, KissKHSitePort
from kisskh.domain.ports.metadata import MetadataClientPort

# Type aliases for injected pure functions.
_SelectFn = Callable[[list[SearchResult], str], SearchResult | None]
_PostIdFn = Callable[[str], Extraction[str | None]]
_BlogIdsFn = Callable[[str], Extraction[list[str]]]

log = structlog.get_logger(__name__)


class EpisodeResolver:
    """Runs the KissKH resolution stages for one title + episode."""

    def __init__(
        self,
        *,
        metadata: MetadataClientPort,
        site: KissKHSitePort,
        feed: FeedClientPort,
        select_fn: _SelectFn,
        post_id_fn: _PostIdFn,
        blog_ids_fn: _BlogIdsFn,
    ) -> None:
        self._metadata = metadata
        self._site = site
        self._feed = feed
        self._select = select_fn
        self._post_id = post_id_fn
        self._blog_ids = blog_ids_fn

    async def lookup_title(self, imdb_id: str) -> TitleRecord | None:
        """Stage 1: canonical title for *imdb_id*."""
        try:
            return await self._metadata.get_title(imdb_id)
        except Exception:
            log.warning(
                "resolver_title_lookup_failed", imdb_id=imdb_id, exc_info=True
            )
            return None

    async def resolve_feed(
        self, title: TitleRecord, episode: int
    ) -> ResolvedEpisode | None:
        """Stages 2-6: locate the feed content holding *episode* of *title*."""
        try:
            return await self._run_stages(title, episode)
        except Exception:
            log.warning(
                "resolver_chain_failed",
                title=title.name,
                episode=episode,
                exc_info=True,
            )
            return None

    async def _run_stages(
        self, title: TitleRecord, episode: int
    ) -> ResolvedEpisode | None:
        results = await self._site.search(title.name)
        show = self._select(results, title.name)
        if show is None:
            log.info("resolver_show_not_found", title=title.name)
            return None

        pattern = await self._site.episode_pattern(show.page_url)
        if pattern is None:
            log.info("resolver_no_episode_pattern", url=show.page_url)
            return None

        html = await self._site.fetch_episode_page(pattern, episode)
        if html is None:
            return None

        post = self._post_id(html)
        if post.value is None:
            log.info(
                "resolver_post_id_missing",
                slug=pattern.slug,
                episode=episode,
                status=post.status.value,
            )
            return None

        blog_ids = self._blog_ids(html)
        if not blog_ids.found:
            log.debug(
                "resolver_blog_ids_defaulted",
                status=blog_ids.status.value,
                detail=blog_ids.detail,
            )

        accepted = await self._feed.fetch_first(blog_ids.value, post.value)
        if accepted is None:
            return None

        blog_id, content = accepted
        log.info(
            "resolver_feed_resolved",
            title=title.name,
            matched=show.title,
            episode=episode,
            post_id=post.value,
            blog_id=blog_id,
        )
        return ResolvedEpisode(
            title=title,
            episode=episode,
            feed_content=content,
            post_id=post.value,
            blog_id=blog_id,
        )

    async def resolve(self, imdb_id: str, episode: int) -> ResolvedEpisode | None:
        """Run the whole chain; ``None`` on any stage miss or error."""
        title = await self.lookup_title(imdb_id)
        if title is None:
            return None
        return await self.resolve_feed(title, episode)
