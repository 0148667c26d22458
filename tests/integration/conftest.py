"""Shared fixtures for integration tests.

These tests use the real composition root (create_app + lifespan) and real
clients with upstream HTTP mocked via respx.
"""

from __future__ import annotations

import pytest
import respx

from kisskh.infrastructure.config import AppConfig, KissKHConfig

SITE = "https://kisskh.club"
CINEMETA = "https://v3-cinemeta.strem.io"
FEEDS = "https://www.blogger.com/feeds"


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(
        environment="test",
        kisskh=KissKHConfig(base_url=SITE, metadata_url=CINEMETA),
    )


@pytest.fixture()
def upstream(
    respx_mock: respx.MockRouter,
    search_html: str,
    title_page_html: str,
    episode_page_html: str,
    feed_content: str,
) -> respx.MockRouter:
    """Happy-path upstream: Cinemeta -> search -> title -> episode -> feed."""
    respx_mock.get(
        f"{CINEMETA}/meta/series/tt1234567.json", name="cinemeta"
    ).respond(json={"meta": {"name": "Show A", "year": "2021–"}})
    respx_mock.get(f"{SITE}/", params={"s": "Show A"}, name="search").respond(
        text=search_html
    )
    respx_mock.get(f"{SITE}/series/show-a/", name="title_page").respond(
        text=title_page_html
    )
    respx_mock.get(f"{SITE}/show-a/show-a-episode/", name="episode_page").respond(
        text=episode_page_html
    )
    respx_mock.get(
        f"{FEEDS}/1111111111/posts/default/987654321", name="feed"
    ).respond(json={"entry": {"content": {"$t": feed_content}}})
    return respx_mock
