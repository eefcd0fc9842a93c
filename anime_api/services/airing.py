"""Top airing anime: cached, trailer-enriched, never empty."""
import logging
import time
from typing import Callable, Optional

from anime_api.config import PipelineConfig
from anime_api.monitoring import PipelineRunLogger, RunSource
from anime_api.schemas import AnimeSummary, assign_ranks
from anime_api.services.fallback import StaticFallbackCatalog
from anime_api.services.result_cache import ResultCache
from anime_api.services.seasonal import SeasonalListFetcher
from anime_api.services.trailers import TrailerLookupChain

logger = logging.getLogger(__name__)


class AiringListOrchestrator:
    """
    Produces the top airing list.

    Order of work: cached list if fresh, else the seasonal pool enriched with
    trailers one candidate at a time, paced by `config.trailer_lookup_delay`
    between lookups to stay inside third-party rate limits. Any failure after
    the cache check yields the static catalog instead.
    """

    def __init__(
        self,
        cache: ResultCache,
        fetcher: SeasonalListFetcher,
        chain: TrailerLookupChain,
        fallback: StaticFallbackCatalog,
        config: PipelineConfig,
        sleep: Callable[[float], None] = time.sleep,
        run_logger: Optional[PipelineRunLogger] = None,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.chain = chain
        self.fallback = fallback
        self.config = config
        self._sleep = sleep
        self.run_logger = run_logger

    def get_top_airing_anime(self) -> list[AnimeSummary]:
        start = time.perf_counter()

        cached = self._read_cache()
        if cached is not None:
            result = list(cached)
            self._record_run(RunSource.CACHE, result, start)
            return result

        try:
            candidates = self.fetcher.fetch()
            if not candidates:
                logger.warning("No seasonal candidates; serving static catalog")
                result = self.fallback.snapshot()
                self._record_run(RunSource.FALLBACK, result, start, error="empty seasonal pool")
                return result

            enriched, lookups = self._enrich(candidates)
            self._write_cache(enriched)
        except Exception as e:
            logger.exception("Top airing pipeline failed; serving static catalog")
            result = self.fallback.snapshot()
            self._record_run(RunSource.FALLBACK, result, start, error=str(e))
            return result

        self._record_run(RunSource.LIVE, enriched, start, lookups=lookups)
        return enriched

    def _read_cache(self) -> Optional[tuple[AnimeSummary, ...]]:
        try:
            entry = self.cache.get(self.config.cache_key)
        except Exception as e:
            logger.warning(f"Cache read raised, treating as miss: {e}")
            return None
        return entry.value if entry is not None else None

    def _write_cache(self, enriched: list[AnimeSummary]) -> None:
        try:
            self.cache.put(self.config.cache_key, enriched, self.config.cache_ttl)
        except Exception as e:
            logger.warning(f"Cache write raised, result not cached: {e}")

    def _enrich(self, candidates: list[AnimeSummary]) -> tuple[list[AnimeSummary], int]:
        """Attach trailers in pool order; returns the ranked list and the number of lookups."""
        enriched = []
        lookups = 0
        last_index = len(candidates) - 1
        for index, anime in enumerate(candidates):
            if anime.has_trailer:
                enriched.append(anime)
                continue

            trailer = self.chain.resolve(anime)
            lookups += 1
            enriched.append(anime.model_copy(update={
                "trailer_youtube_id": trailer.youtube_id,
                "trailer_url": trailer.url,
            }))
            if index < last_index:
                self._sleep(self.config.trailer_lookup_delay)

        return assign_ranks(enriched), lookups

    def _record_run(
        self,
        source: RunSource,
        result: list[AnimeSummary],
        start: float,
        lookups: int = 0,
        error: Optional[str] = None,
    ) -> None:
        latency_ms = (time.perf_counter() - start) * 1000
        trailers = sum(1 for anime in result if anime.has_trailer)
        logger.info(
            f"Top airing served from {source.value}: {len(result)} items, "
            f"{trailers} trailers, {lookups} lookups, {latency_ms:.0f}ms"
        )
        if self.run_logger is None:
            return
        self.run_logger.log(self.run_logger.create_log_entry(
            source=source,
            item_count=len(result),
            trailers_found=trailers,
            lookups_performed=lookups,
            latency_ms=latency_ms,
            error_message=error,
        ))
