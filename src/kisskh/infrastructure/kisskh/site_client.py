"""KissKH site client: title search, title page and episode page scraping.

Site layout (WordPress "mangareader"-style theme):
- ``/?s={query}`` lists results as ``.listupd article.bs`` blocks whose
  first ``<a>`` points to ``/series/{slug}/`` and carries a ``title``
  attribute (fallback: ``.tt h2`` text).
- A title page lists its episodes under ``.eplister ul li a``; the first
  link looks like ``/{slug}/{episode-base}/``.
- Episode pages are addressed as
  ``/{slug}/{episode-base}/?server=02&episode=NN``.
"""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

import httpx
import structlog

from kisskh.domain.entities.kisskh import EpisodePattern, SearchResult
from kisskh.infrastructure.common.html_selectors import attr_of, parse_html, text_of

log = structlog.get_logger(__name__)

_SERIES_PATH = "/series/"


def parse_search_results(html: str, base_url: str) -> list[SearchResult]:
    """Parse the search listing into candidates (``/series/`` links only).

    Links are resolved against *base_url*, so relative hrefs yield
    absolute page URLs.
    """
    soup = parse_html(html)
    results: list[SearchResult] = []
    for article in soup.select(".listupd article.bs"):
        href = attr_of(article, "a", "href")
        if not href:
            continue
        url = urljoin(base_url, href)
        path = urlparse(url).path
        if _SERIES_PATH not in path:
            continue
        title = attr_of(article, "a", "title") or text_of(article, ".tt h2")
        slug = path.split(_SERIES_PATH, 1)[1].strip("/")
        results.append(SearchResult(page_url=url, title=title, slug=slug))
    return results


def select_show(results: list[SearchResult], name: str) -> SearchResult | None:
    """Pick the best candidate for *name*.

    Case-insensitive exact title match, else case-insensitive prefix match,
    else the first candidate.  The year is not used to disambiguate.
    """
    wanted = name.lower()
    for result in results:
        if result.title.lower() == wanted:
            return result
    for result in results:
        if result.title.lower().startswith(wanted):
            return result
    return results[0] if results else None


def parse_episode_pattern(html: str, base_url: str) -> EpisodePattern | None:
    """Derive the episode URL pattern from the first episode-list link."""
    soup = parse_html(html)
    href = attr_of(soup, ".eplister ul li a", "href")
    if not href:
        return None

    parts = [p for p in urlparse(urljoin(base_url, href)).path.split("/") if p]
    if len(parts) < 2:
        return None

    slug, episode_base = parts[-2], parts[-1]
    return EpisodePattern(
        slug=slug,
        episode_base=episode_base,
        base_url=f"{base_url}/{slug}/{episode_base}",
    )


class KissKHSiteClient:
    """Scrapes kisskh.club pages with a shared httpx client.

    Implements ``KissKHSitePort``.  Every request is bounded by
    *timeout*; failures are logged and reported as ``None``/empty.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str = "https://kisskh.club",
        server: str = "02",
        timeout: float = 10.0,
    ) -> None:
        self._http = http_client
        self.base_url = base_url.rstrip("/")
        self._server = server
        self._timeout = timeout

    async def _safe_fetch(
        self,
        url: str,
        *,
        context: str = "",
        **kwargs: object,
    ) -> str | None:
        """GET *url* and return its text, or ``None`` on any HTTP failure."""
        try:
            resp = await self._http.get(url, timeout=self._timeout, **kwargs)
            resp.raise_for_status()
            return resp.text
        except httpx.TimeoutException:
            log.warning("kisskh_timeout", url=url, context=context)
        except httpx.HTTPStatusError as exc:
            log.warning(
                "kisskh_http_error",
                url=url,
                status=exc.response.status_code,
                context=context,
            )
        except httpx.HTTPError as exc:
            log.warning("kisskh_fetch_error", url=url, error=str(exc), context=context)
        return None

    async def search(self, query: str) -> list[SearchResult]:
        html = await self._safe_fetch(
            f"{self.base_url}/", params={"s": query}, context="search"
        )
        if html is None:
            return []
        results = parse_search_results(html, self.base_url)
        log.debug("kisskh_search_parsed", query=query, count=len(results))
        return results

    async def episode_pattern(self, page_url: str) -> EpisodePattern | None:
        html = await self._safe_fetch(page_url, context="title_page")
        if html is None:
            return None
        pattern = parse_episode_pattern(html, self.base_url)
        if pattern is None:
            log.info("kisskh_no_episode_list", url=page_url)
        return pattern

    async def fetch_episode_page(
        self, pattern: EpisodePattern, episode: int
    ) -> str | None:
        url = pattern.episode_url(episode, server=self._server)
        return await self._safe_fetch(url, context="episode_page")
