"""Tests for KissKHSiteClient and its pure page parsers."""

from __future__ import annotations

import httpx
import pytest
import respx

from kisskh.domain.entities.kisskh import SearchResult
from kisskh.infrastructure.kisskh.site_client import (
    KissKHSiteClient,
    parse_episode_pattern,
    parse_search_results,
    select_show,
)

_BASE = "https://kisskh.club"


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture()
def client(http_client: httpx.AsyncClient) -> KissKHSiteClient:
    return KissKHSiteClient(http_client=http_client, base_url=_BASE)


def _result(title: str, slug: str = "") -> SearchResult:
    slug = slug or title.lower().replace(" ", "-")
    return SearchResult(page_url=f"{_BASE}/series/{slug}/", title=title, slug=slug)


# ---------------------------------------------------------------------------
# parse_search_results
# ---------------------------------------------------------------------------


class TestParseSearchResults:
    def test_series_links_only(self, search_html: str) -> None:
        results = parse_search_results(search_html, _BASE)
        assert [r.title for r in results] == ["Showa Special", "Show A"]

    def test_slug_and_url(self, search_html: str) -> None:
        results = parse_search_results(search_html, _BASE)
        assert results[1].slug == "show-a"
        assert results[1].page_url == f"{_BASE}/series/show-a/"

    def test_title_falls_back_to_heading(self) -> None:
        html = (
            '<div class="listupd"><article class="bs">'
            '<a href="https://kisskh.club/series/x/">'
            '<div class="tt"><h2> Heading Title </h2></div></a>'
            "</article></div>"
        )
        results = parse_search_results(html, _BASE)
        assert results[0].title == "Heading Title"

    def test_relative_link_resolved(self) -> None:
        html = (
            '<div class="listupd"><article class="bs">'
            '<a href="/series/show-a/" title="Show A"></a>'
            "</article></div>"
        )
        results = parse_search_results(html, _BASE)
        assert results[0].page_url == f"{_BASE}/series/show-a/"
        assert results[0].slug == "show-a"

    def test_empty_page(self) -> None:
        assert parse_search_results("<html></html>", _BASE) == []


# ---------------------------------------------------------------------------
# select_show
# ---------------------------------------------------------------------------


class TestSelectShow:
    def test_exact_beats_prefix(self) -> None:
        results = [_result("Showa Special"), _result("Show A")]
        assert select_show(results, "Show A").title == "Show A"

    def test_exact_match_is_case_insensitive(self) -> None:
        results = [_result("Other"), _result("SHOW A")]
        assert select_show(results, "show a").title == "SHOW A"

    def test_prefix_match(self) -> None:
        results = [_result("Other"), _result("Show A Season 2")]
        assert select_show(results, "Show A").title == "Show A Season 2"

    def test_falls_back_to_first(self) -> None:
        results = [_result("Unrelated"), _result("Other")]
        assert select_show(results, "Show A").title == "Unrelated"

    def test_no_results(self) -> None:
        assert select_show([], "Show A") is None


# ---------------------------------------------------------------------------
# parse_episode_pattern
# ---------------------------------------------------------------------------


class TestParseEpisodePattern:
    def test_first_episode_link(self, title_page_html: str) -> None:
        pattern = parse_episode_pattern(title_page_html, _BASE)
        assert pattern is not None
        assert pattern.slug == "show-a"
        assert pattern.episode_base == "show-a-episode"
        assert pattern.base_url == f"{_BASE}/show-a/show-a-episode"

    def test_relative_link(self) -> None:
        html = '<div class="eplister"><ul><li><a href="/s/s-ep/">1</a></li></ul></div>'
        pattern = parse_episode_pattern(html, _BASE)
        assert pattern is not None
        assert pattern.base_url == f"{_BASE}/s/s-ep"

    def test_single_segment_rejected(self) -> None:
        html = '<div class="eplister"><ul><li><a href="/only/">1</a></li></ul></div>'
        assert parse_episode_pattern(html, _BASE) is None

    def test_no_episode_list(self) -> None:
        assert parse_episode_pattern("<html></html>", _BASE) is None


# ---------------------------------------------------------------------------
# KissKHSiteClient (HTTP)
# ---------------------------------------------------------------------------


class TestSearch:
    @respx.mock
    async def test_search_sends_query(
        self, client: KissKHSiteClient, search_html: str
    ) -> None:
        route = respx.get(f"{_BASE}/", params={"s": "Show A"}).respond(
            text=search_html
        )

        results = await client.search("Show A")

        assert route.called
        assert len(results) == 2

    @respx.mock
    async def test_search_http_error_returns_empty(
        self, client: KissKHSiteClient
    ) -> None:
        respx.get(f"{_BASE}/").respond(status_code=503)
        assert await client.search("Show A") == []

    @respx.mock
    async def test_search_timeout_returns_empty(
        self, client: KissKHSiteClient
    ) -> None:
        respx.get(f"{_BASE}/").mock(side_effect=httpx.ReadTimeout("slow"))
        assert await client.search("Show A") == []


class TestEpisodePages:
    @respx.mock
    async def test_episode_pattern(
        self, client: KissKHSiteClient, title_page_html: str
    ) -> None:
        respx.get(f"{_BASE}/series/show-a/").respond(text=title_page_html)

        pattern = await client.episode_pattern(f"{_BASE}/series/show-a/")

        assert pattern is not None
        assert pattern.slug == "show-a"

    @respx.mock
    async def test_episode_pattern_network_error(
        self, client: KissKHSiteClient
    ) -> None:
        respx.get(f"{_BASE}/series/show-a/").mock(
            side_effect=httpx.ConnectError("down")
        )
        assert await client.episode_pattern(f"{_BASE}/series/show-a/") is None

    @respx.mock
    async def test_fetch_episode_page_url(
        self, client: KissKHSiteClient, episode_pattern, episode_page_html: str
    ) -> None:
        route = respx.get(
            f"{_BASE}/show-a/show-a-episode/",
            params={"server": "02", "episode": "05"},
        ).respond(text=episode_page_html)

        html = await client.fetch_episode_page(episode_pattern, 5)

        assert route.called
        assert html == episode_page_html

    @respx.mock
    async def test_fetch_episode_page_404(
        self, client: KissKHSiteClient, episode_pattern
    ) -> None:
        respx.get(f"{_BASE}/show-a/show-a-episode/").respond(status_code=404)
        assert await client.fetch_episode_page(episode_pattern, 5) is None
