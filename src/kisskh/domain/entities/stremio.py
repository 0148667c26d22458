"""Domain entities for the Stremio addon surface.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StremioContentType = Literal["movie", "series"]


@dataclass(frozen=True)
class StremioRequest:
    """Parsed Stremio stream/subtitles request.

    Created from URL path: ``tt1234567`` (movie) or
    ``tt1234567:1:5`` (series, season 1, episode 5).
    """

    imdb_id: str
    content_type: StremioContentType
    season: int = 1
    episode: int = 1


@dataclass(frozen=True)
class StremioStream:
    """Stremio protocol Stream object (JSON-serializable)."""

    url: str  # Direct video URL
    title: str  # Shown in the Stremio UI, e.g. "KissKH 720p"


@dataclass(frozen=True)
class SubtitleTrack:
    """Stremio protocol Subtitle object.

    ``url`` is either a base64 ``data:`` URI with repaired text or, when the
    subtitle could not be fetched, the original remote URL.
    """

    id: str  # Original remote subtitle URL
    url: str
    label: str
    language_code: str = "spa"
