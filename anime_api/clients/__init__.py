"""HTTP clients for the upstream anime and trailer sources."""

from .anilist import AniListClient
from .jikan import AnimeNotFoundError, JikanClient, JikanError
from .youtube import YouTubeSearchClient

__all__ = [
    "AniListClient",
    "AnimeNotFoundError",
    "JikanClient",
    "JikanError",
    "YouTubeSearchClient",
]
