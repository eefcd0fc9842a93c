"""Search, trending and by-id reads against the metadata source."""
import logging

from pydantic import ValidationError
from sqlalchemy.orm import Session

from anime_api.clients.jikan import JikanClient, JikanError
from anime_api.records import get_cached_anime, store_anime
from anime_api.schemas import AnimeSummary, assign_ranks, rank_by_popularity
from anime_api.services.fallback import StaticFallbackCatalog

logger = logging.getLogger(__name__)


class AnimeCatalogService:
    """
    Exploration reads. Unlike the top airing list these have no trailer
    enrichment, and search and by-id let upstream failures reach the caller.
    """

    def __init__(
        self,
        jikan: JikanClient,
        fallback: StaticFallbackCatalog,
        search_limit: int = 20,
        trending_limit: int = 10,
    ):
        self.jikan = jikan
        self.fallback = fallback
        self.search_limit = search_limit
        self.trending_limit = trending_limit

    def search(self, query: str) -> list[AnimeSummary]:
        """
        Free-text search in upstream relevance order.

        Raises:
            JikanError: If the metadata source fails.
        """
        query = (query or "").strip()
        if not query:
            return []

        raw_items = self.jikan.search_anime(query, limit=self.search_limit)
        try:
            results = [AnimeSummary.from_jikan_response(item) for item in raw_items]
        except (ValidationError, KeyError, TypeError, AttributeError) as e:
            raise JikanError(f"Malformed search results for '{query}': {e}") from e
        logger.info(f"Search '{query}' returned {len(results)} anime")
        return assign_ranks(results)

    def trending(self) -> list[AnimeSummary]:
        """Most popular anime, falling back to the static list on any upstream failure."""
        try:
            raw_items = self.jikan.fetch_top_anime(limit=self.trending_limit, filter_type="bypopularity")
            results = [AnimeSummary.from_jikan_response(item) for item in raw_items]
        except (JikanError, ValidationError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Trending fetch failed, serving static list: {e}")
            return self.fallback.trending(limit=self.trending_limit)

        if not results:
            logger.warning("Trending fetch returned nothing, serving static list")
            return self.fallback.trending(limit=self.trending_limit)
        return rank_by_popularity(results, limit=self.trending_limit)

    def get_anime(self, db: Session, mal_id: int) -> AnimeSummary:
        """
        Read-through lookup: the record cache first, then the metadata source.

        Raises:
            AnimeNotFoundError: If the id does not exist upstream.
            JikanError: If the metadata source fails.
        """
        cached = get_cached_anime(db, mal_id)
        if cached is not None:
            logger.debug(f"Record cache hit for anime {mal_id}")
            return cached

        data = self.jikan.fetch_anime_by_id(mal_id)
        try:
            anime = AnimeSummary.from_jikan_response(data)
        except (ValidationError, KeyError, TypeError, AttributeError) as e:
            raise JikanError(f"Malformed anime payload for {mal_id}: {e}") from e

        store_anime(db, anime)
        return anime
