from .episode_resolver import EpisodeResolver
from .stremio_stream import StremioStreamUseCase
from .stremio_subtitles import StremioSubtitlesUseCase

__all__ = ["EpisodeResolver", "StremioStreamUseCase", "StremioSubtitlesUseCase"]
