"""Current-season candidate pool for the top airing list."""
import logging

from pydantic import ValidationError

from anime_api.clients.jikan import JikanClient, JikanError
from anime_api.schemas import AiringStatus, AnimeSummary, rank_by_popularity

logger = logging.getLogger(__name__)


class SeasonalListFetcher:
    """Fetches this season's anime and keeps the `top_n` most popular."""

    def __init__(self, jikan: JikanClient, top_n: int = 5, page_size: int = 25):
        self.jikan = jikan
        self.top_n = top_n
        self.page_size = page_size

    @staticmethod
    def normalize(item: dict) -> AnimeSummary:
        """Convert a raw season entry, defaulting the score and forcing the airing status."""
        anime = AnimeSummary.from_jikan_response(item)
        # Listed by the current-season endpoint, so treated as airing even if it just ended
        update = {"status": AiringStatus.CURRENTLY_AIRING}
        if anime.score is None:
            update["score"] = 0.0
        return anime.model_copy(update=update)

    def fetch(self) -> list[AnimeSummary]:
        """
        Return up to `top_n` airing anime, most popular first, ranked 1..N.

        Returns an empty list when the metadata source is unreachable or its
        payload cannot be parsed; the caller decides what to fall back to.
        """
        try:
            raw_items = self.jikan.fetch_current_season(limit=self.page_size)
            candidates = [self.normalize(item) for item in raw_items]
        except (JikanError, ValidationError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Seasonal anime fetch failed: {e}")
            return []

        ranked = rank_by_popularity(candidates, limit=self.top_n)
        logger.info(f"Seasonal pool: {len(candidates)} candidates, kept {len(ranked)}")
        return ranked
