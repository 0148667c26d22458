"""Blogger feed client: fetches the post entry holding the episode media blob.

Feed hosting is sharded across several blogs and only one of them usually
holds a given post, so every candidate blog ID is tried in order until one
answers with an ``entry``.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

log = structlog.get_logger(__name__)

_FEED_URL = "https://www.blogger.com/feeds/{blog_id}/posts/default/{post_id}"


def entry_content(data: Any) -> str | None:
    """Return ``entry.content.$t`` from a Blogger JSON feed, if present."""
    if not isinstance(data, dict):
        return None
    entry = data.get("entry")
    if not isinstance(entry, dict):
        return None
    content = entry.get("content")
    if not isinstance(content, dict):
        return None
    text = content.get("$t")
    return text if isinstance(text, str) and text else None


class BloggerFeedClient:
    """Implements ``FeedClientPort`` against www.blogger.com JSON feeds."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        timeout: float = 5.0,
    ) -> None:
        self._http = http_client
        self._timeout = timeout

    async def fetch_content(self, blog_id: str, post_id: str) -> str | None:
        """Fetch one (blog, post) entry. ``None`` on any failure."""
        url = _FEED_URL.format(blog_id=blog_id, post_id=post_id)
        try:
            resp = await self._http.get(
                url, params={"alt": "json"}, timeout=self._timeout
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            log.debug(
                "blogger_feed_attempt_failed",
                blog_id=blog_id,
                post_id=post_id,
                error=str(exc),
            )
            return None
        return entry_content(data)

    async def fetch_first(
        self, blog_ids: list[str], post_id: str
    ) -> tuple[str, str] | None:
        """Return ``(blog_id, content)`` for the first blog that has the post."""
        for blog_id in blog_ids:
            content = await self.fetch_content(blog_id, post_id)
            if content is not None:
                log.debug("blogger_feed_found", blog_id=blog_id, post_id=post_id)
                return blog_id, content

        log.warning(
            "blogger_feed_unavailable", post_id=post_id, attempts=len(blog_ids)
        )
        return None
