"""Application configuration constants."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

DEFAULT_JIKAN_BASE_URL = "https://api.jikan.moe/v4"
DEFAULT_ANILIST_URL = "https://graphql.anilist.co"
DEFAULT_YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={youtube_id}"
PLACEHOLDER_IMAGE_URL = "https://placehold.co/225x318?text=No+Image"

TOP_AIRING_CACHE_KEY = "top_airing_anime"

# Sorts after any real popularity rank reported by the metadata source
UNRANKED_POPULARITY = 999_999

MAX_QUERY_LENGTH = 100

USER_AGENT = "AnimeGalaxyAPI/1.0"


@dataclass(frozen=True)
class PipelineConfig:
    """Tunables for the top airing pipeline, fixed for the life of the process."""
    cache_ttl_seconds: int = 7200
    trailer_lookup_delay: float = 0.2
    top_n: int = 5
    seasonal_page_size: int = 25
    cache_key: str = TOP_AIRING_CACHE_KEY

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(seconds=self.cache_ttl_seconds)
