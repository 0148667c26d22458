"""Tests for CinemetaClient (IMDb ID -> canonical title)."""

from __future__ import annotations

import httpx
import pytest
import respx

from kisskh.infrastructure.metadata.cinemeta import CinemetaClient, normalize_year

_BASE = "https://v3-cinemeta.strem.io"


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture()
def client(http_client: httpx.AsyncClient) -> CinemetaClient:
    return CinemetaClient(http_client=http_client)


class TestNormalizeYear:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2019–2021", "2019"),
            ("2019-", "2019"),
            ("2019-2020", "2019"),
            ("2008", "2008"),
            (2008, "2008"),
            ("", None),
            (None, None),
        ],
    )
    def test_first_year_kept(self, raw: object, expected: str | None) -> None:
        assert normalize_year(raw) == expected


class TestGetTitle:
    @respx.mock
    async def test_series_found(self, client: CinemetaClient) -> None:
        series = respx.get(f"{_BASE}/meta/series/tt1.json").respond(
            json={"meta": {"name": "Show A", "year": "2021–2022"}}
        )
        movie = respx.get(f"{_BASE}/meta/movie/tt1.json")

        title = await client.get_title("tt1")

        assert title is not None
        assert title.name == "Show A"
        assert title.year == "2021"
        assert title.imdb_id == "tt1"
        assert series.called
        assert not movie.called

    @respx.mock
    async def test_falls_back_to_movie(self, client: CinemetaClient) -> None:
        respx.get(f"{_BASE}/meta/series/tt2.json").respond(json={"meta": {}})
        respx.get(f"{_BASE}/meta/movie/tt2.json").respond(
            json={"meta": {"name": "Film B", "releaseInfo": "2020"}}
        )

        title = await client.get_title("tt2")

        assert title is not None
        assert title.name == "Film B"
        assert title.year == "2020"

    @respx.mock
    async def test_series_error_then_movie(self, client: CinemetaClient) -> None:
        respx.get(f"{_BASE}/meta/series/tt3.json").respond(status_code=500)
        respx.get(f"{_BASE}/meta/movie/tt3.json").respond(
            json={"meta": {"name": "Film C"}}
        )

        title = await client.get_title("tt3")

        assert title is not None
        assert title.name == "Film C"
        assert title.year is None

    @respx.mock
    async def test_both_fail(self, client: CinemetaClient) -> None:
        respx.get(f"{_BASE}/meta/series/tt4.json").mock(
            side_effect=httpx.ConnectError("down")
        )
        respx.get(f"{_BASE}/meta/movie/tt4.json").respond(json={"meta": None})

        assert await client.get_title("tt4") is None

    @respx.mock
    async def test_custom_base_url(self, http_client: httpx.AsyncClient) -> None:
        client = CinemetaClient(
            http_client=http_client, base_url="https://meta.example.com/"
        )
        route = respx.get("https://meta.example.com/meta/series/tt5.json").respond(
            json={"meta": {"name": "X"}}
        )

        assert (await client.get_title("tt5")).name == "X"
        assert route.called
