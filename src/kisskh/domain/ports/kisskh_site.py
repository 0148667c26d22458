"""Ports for the scraped KissKH site and its Blogger feed host."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from kisskh.domain.entities.kisskh import EpisodePattern, SearchResult


@runtime_checkable
class KissKHSitePort(Protocol):
    """Async access to the KissKH content site (HTML pages)."""

    async def search(self, query: str) -> list[SearchResult]:
        """Search the site; empty list on no results or failure."""
        ...

    async def episode_pattern(self, page_url: str) -> EpisodePattern | None:
        """Derive the episode URL pattern from a title page."""
        ...

    async def fetch_episode_page(
        self, pattern: EpisodePattern, episode: int
    ) -> str | None:
        """Return the raw HTML of an episode page, or None on failure."""
        ...


@runtime_checkable
class FeedClientPort(Protocol):
    """Async access to the Blogger feed host."""

    async def fetch_first(
        self, blog_ids: list[str], post_id: str
    ) -> tuple[str, str] | None:
        """Try *blog_ids* in order; return ``(blog_id, content)`` of the first hit."""
        ...


@runtime_checkable
class SubtitleFetcherPort(Protocol):
    """Async download of raw subtitle text."""

    async def fetch_text(self, url: str) -> str | None:
        """Return the subtitle body, or None on failure."""
        ...
