"""Pure parsers for KissKH episode pages and Blogger feed content.

Episode pages embed a ``videoPlayerSettings = {...};`` object (which names
the Blogger blog hosting the feed) and a ``<div id="kisskh"
data-post-id="...">`` marker.  The feed entry content is a ``;``-separated
blob of per-episode chunks with JSON-escaped URLs (``https:\\/\\/...``).

Matching is substring/regex based: the feed is semi-structured
and changes shape between uploads.
"""

from __future__ import annotations

import json
import re

from kisskh.domain.entities.kisskh import EpisodeMedia, Extraction, ExtractionStatus

DEFAULT_BLOG_IDS: tuple[str, ...] = (
    "4279541129339784660",
    "5681251218610301606",
    "4930891644815837589",
    "8100659440703509286",
)

_SETTINGS_RE = re.compile(r"videoPlayerSettings\s*=\s*(\{.+?\});", re.DOTALL)

# Attribute order varies between page templates.
_POST_ID_RE = re.compile(
    r"<div[^>]*"
    r"(?:"
    r'id="kisskh"[^>]*data-post-id="(\d+)"'
    r"|"
    r'data-post-id="(\d+)"[^>]*id="kisskh"'
    r")"
    r"[^>]*>"
)

_CLOUDINARY_VTT_RE = re.compile(
    r"https?:\\?/\\?/res\.cloudinary\.com\\?/[^/]+\\?/[^,\n]+\.vtt"
)
_MP4_RE = re.compile(r"""https?:\\?/\\?/[^"'\s|]+\.mp4""")
_NOISE_RE = re.compile(r"""["'\\]""")


def _episode_markers(episode: int) -> tuple[str, str]:
    """Spanish subtitle file names used for *episode* (two naming variants)."""
    num = f"{episode:02d}"
    return f"/{num}.es.vtt", f"/{num}.spa.vtt"


def _mentions(text: str, markers: tuple[str, ...]) -> bool:
    return any(marker in text for marker in markers)


def _unescape_slashes(url: str) -> str:
    return url.replace("\\/", "/")


def extract_config_identifiers(
    html: str,
    defaults: tuple[str, ...] | list[str] = DEFAULT_BLOG_IDS,
) -> Extraction[list[str]]:
    """Return the Blogger blog IDs to try, in order.

    Uses ``videoPlayerSettings.bloggerAPI.blogId`` when present (a single
    string becomes a one-element list), else *defaults*.
    """
    match = _SETTINGS_RE.search(html)
    if match is None:
        return Extraction(
            ExtractionStatus.NOT_FOUND,
            list(defaults),
            "no videoPlayerSettings assignment",
        )

    try:
        settings = json.loads(match.group(1))
    except ValueError as exc:
        return Extraction(ExtractionStatus.MALFORMED, list(defaults), str(exc))

    blogger = settings.get("bloggerAPI") if isinstance(settings, dict) else None
    blog_id = blogger.get("blogId") if isinstance(blogger, dict) else None

    if isinstance(blog_id, (str, int)) and str(blog_id):
        return Extraction(ExtractionStatus.FOUND, [str(blog_id)])
    if isinstance(blog_id, list) and blog_id:
        return Extraction(ExtractionStatus.FOUND, [str(b) for b in blog_id])

    return Extraction(
        ExtractionStatus.NOT_FOUND, list(defaults), "settings without blogId"
    )


def extract_post_id(html: str) -> Extraction[str | None]:
    """Return the numeric Blogger post ID from the ``#kisskh`` marker div."""
    match = _POST_ID_RE.search(html)
    if match is None:
        return Extraction(ExtractionStatus.NOT_FOUND, None, "no #kisskh marker")
    return Extraction(ExtractionStatus.FOUND, match.group(1) or match.group(2))


def extract_subtitle_urls(content: str, episode: int) -> list[str]:
    """Return the cleaned Spanish subtitle URLs for *episode*, in feed order."""
    markers = _episode_markers(episode)
    urls: list[str] = []
    for chunk in content.split(";"):
        if not _mentions(chunk, markers):
            continue
        for raw in _CLOUDINARY_VTT_RE.findall(chunk):
            clean = _NOISE_RE.sub("", _unescape_slashes(raw))
            if _mentions(clean, markers):
                urls.append(clean)
    return urls


def extract_video_url(content: str, episode: int) -> str | None:
    """Return the first direct ``.mp4`` link among the episode's chunks."""
    markers = _episode_markers(episode)
    for chunk in content.split(";"):
        if not _mentions(chunk, markers):
            continue
        match = _MP4_RE.search(chunk)
        if match:
            return _unescape_slashes(match.group(0))
    return None


def extract_episode_media(content: str, episode: int) -> EpisodeMedia:
    """Recover the video URL and subtitle URLs for *episode* from feed content."""
    return EpisodeMedia(
        video_url=extract_video_url(content, episode),
        subtitle_urls=extract_subtitle_urls(content, episode),
    )
