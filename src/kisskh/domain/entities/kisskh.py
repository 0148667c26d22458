"""Domain entities for the KissKH resolution pipeline.

IMDb ID -> TitleRecord -> SearchResult -> EpisodePattern
-> ResolvedEpisode (feed content) -> EpisodeMedia.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TitleRecord:
    """Canonical title metadata for an IMDb ID."""

    name: str
    year: str | None
    imdb_id: str


@dataclass(frozen=True)
class SearchResult:
    """Candidate title page on the content site."""

    page_url: str
    title: str
    slug: str


@dataclass(frozen=True)
class EpisodePattern:
    """URL template for the episode pages of one title."""

    slug: str
    episode_base: str
    base_url: str

    def episode_url(self, episode: int, *, server: str = "02") -> str:
        """Build the page URL for *episode* (zero-padded to two digits)."""
        return f"{self.base_url}/?server={server}&episode={episode:02d}"


@dataclass(frozen=True)
class EpisodeMedia:
    """Media recovered from feed content for one episode."""

    video_url: str | None = None
    subtitle_urls: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ResolvedEpisode:
    """Output of the resolver chain: accepted feed content plus context."""

    title: TitleRecord
    episode: int
    feed_content: str
    post_id: str = ""
    blog_id: str = ""


class ExtractionStatus(str, Enum):
    """Outcome of a tolerant parsing step."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class Extraction(Generic[T]):
    """Result of a pure extraction.

    ``value`` always holds something usable (the parsed value, a default,
    or ``None``); ``status`` tells why.
    """

    status: ExtractionStatus
    value: T
    detail: str = ""

    @property
    def found(self) -> bool:
        return self.status is ExtractionStatus.FOUND
