"""Shared test fixtures for the KissKH addon test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from kisskh.domain.entities.kisskh import (
    EpisodePattern,
    ResolvedEpisode,
    SearchResult,
    TitleRecord,
)

# ---------------------------------------------------------------------------
# Sample upstream payloads
# ---------------------------------------------------------------------------

SEARCH_HTML = """
<html><body>
<div class="listupd">
  <article class="bs">
    <a href="https://kisskh.club/series/showa-special/" title="Showa Special">
      <div class="tt"><h2>Showa Special</h2></div>
    </a>
  </article>
  <article class="bs">
    <a href="https://kisskh.club/series/show-a/" title="Show A">
      <div class="tt"><h2>Show A</h2></div>
    </a>
  </article>
  <article class="bs">
    <a href="https://kisskh.club/genre/drama/" title="Drama">Drama</a>
  </article>
</div>
</body></html>
"""

TITLE_PAGE_HTML = """
<html><body>
<div class="eplister"><ul>
  <li><a href="https://kisskh.club/show-a/show-a-episode/">Episode 1</a></li>
  <li><a href="https://kisskh.club/show-a/show-a-episode-2/">Episode 2</a></li>
</ul></div>
</body></html>
"""

EPISODE_PAGE_HTML = """
<html><head>
<script>
var videoPlayerSettings = {"bloggerAPI": {"blogId": "1111111111"}};
</script>
</head><body>
<div id="kisskh" data-post-id="987654321"></div>
</body></html>
"""

FEED_CONTENT = (
    "header;"
    'https:\\/\\/cdn.example.com\\/show-a\\/05.mp4|'
    '"https:\\/\\/res.cloudinary.com\\/demo\\/raw\\/05.es.vtt";'
    'https:\\/\\/cdn.example.com\\/show-a\\/06.mp4|'
    '"https:\\/\\/res.cloudinary.com\\/demo\\/raw\\/06.es.vtt";'
    "footer"
)


# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def title_record() -> TitleRecord:
    return TitleRecord(name="Show A", year="2021", imdb_id="tt1234567")


@pytest.fixture()
def search_result() -> SearchResult:
    return SearchResult(
        page_url="https://kisskh.club/series/show-a/",
        title="Show A",
        slug="show-a",
    )


@pytest.fixture()
def episode_pattern() -> EpisodePattern:
    return EpisodePattern(
        slug="show-a",
        episode_base="show-a-episode",
        base_url="https://kisskh.club/show-a/show-a-episode",
    )


@pytest.fixture()
def resolved_episode(title_record: TitleRecord) -> ResolvedEpisode:
    return ResolvedEpisode(
        title=title_record,
        episode=5,
        feed_content=FEED_CONTENT,
        post_id="987654321",
        blog_id="1111111111",
    )


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_cache() -> AsyncMock:
    """Mock CachePort."""
    cache = AsyncMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    cache.aclose = AsyncMock()
    return cache


@pytest.fixture()
def mock_metadata(title_record: TitleRecord) -> AsyncMock:
    """Mock MetadataClientPort resolving every ID to ``Show A``."""
    metadata = AsyncMock()
    metadata.get_title = AsyncMock(return_value=title_record)
    return metadata


@pytest.fixture()
def mock_site(
    search_result: SearchResult, episode_pattern: EpisodePattern
) -> AsyncMock:
    """Mock KissKHSitePort with a happy-path page for every stage."""
    site = AsyncMock()
    site.search = AsyncMock(return_value=[search_result])
    site.episode_pattern = AsyncMock(return_value=episode_pattern)
    site.fetch_episode_page = AsyncMock(return_value=EPISODE_PAGE_HTML)
    return site


@pytest.fixture()
def mock_feed() -> AsyncMock:
    """Mock FeedClientPort returning the sample feed content."""
    feed = AsyncMock()
    feed.fetch_first = AsyncMock(return_value=("1111111111", FEED_CONTENT))
    return feed


# ---------------------------------------------------------------------------
# Payload fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def search_html() -> str:
    return SEARCH_HTML


@pytest.fixture()
def title_page_html() -> str:
    return TITLE_PAGE_HTML


@pytest.fixture()
def episode_page_html() -> str:
    return EPISODE_PAGE_HTML


@pytest.fixture()
def feed_content() -> str:
    return FEED_CONTENT
