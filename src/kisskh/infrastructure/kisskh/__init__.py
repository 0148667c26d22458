"""KissKH scraping adapters and pure parsers."""

from .encoding import repair_spanish_text, to_vtt_data_uri
from .feed_client import BloggerFeedClient
from .feed_extractor import (
    DEFAULT_BLOG_IDS,
    extract_config_identifiers,
    extract_episode_media,
    extract_post_id,
)
from .site_client import KissKHSiteClient
from .subtitle_fetcher import HttpxSubtitleFetcher

__all__ = [
    "DEFAULT_BLOG_IDS",
    "BloggerFeedClient",
    "HttpxSubtitleFetcher",
    "KissKHSiteClient",
    "extract_config_identifiers",
    "extract_episode_media",
    "extract_post_id",
    "repair_spanish_text",
    "to_vtt_data_uri",
]
