from .cache import CachePort
from .kisskh_site import FeedClientPort, KissKHSitePort, SubtitleFetcherPort
from .metadata import MetadataClientPort

__all__ = [
    "CachePort",
    "FeedClientPort",
    "KissKHSitePort",
    "MetadataClientPort",
    "SubtitleFetcherPort",
]
