"""Static catalog served when no live data can be produced."""
from anime_api.fallback_data import STATIC_CATALOG
from anime_api.schemas import AnimeSummary, rank_by_popularity


class StaticFallbackCatalog:
    """Always-available anime lists with trailers already attached."""

    def snapshot(self) -> list[AnimeSummary]:
        """The static top airing list, ranked 1..N in declaration order."""
        return [anime.model_copy(deep=True) for anime in STATIC_CATALOG]

    def trending(self, limit: int | None = None) -> list[AnimeSummary]:
        """The static catalog re-ranked by popularity."""
        return rank_by_popularity(self.snapshot(), limit=limit)
