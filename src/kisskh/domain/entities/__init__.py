from .kisskh import (
    EpisodeMedia,
    EpisodePattern,
    Extraction,
    ExtractionStatus,
    ResolvedEpisode,
    SearchResult,
    TitleRecord,
)
from .stremio import StremioContentType, StremioRequest, StremioStream, SubtitleTrack

__all__ = [
    "EpisodeMedia",
    "EpisodePattern",
    "Extraction",
    "ExtractionStatus",
    "ResolvedEpisode",
    "SearchResult",
    "StremioContentType",
    "StremioRequest",
    "StremioStream",
    "SubtitleTrack",
    "TitleRecord",
]
