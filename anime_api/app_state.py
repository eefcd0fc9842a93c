"""
Application state container.

Holds the upstream clients and the services built on them for the lifetime
of the process. Built once in the FastAPI lifespan and reached from
endpoints through the `get_app_state` dependency.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from sqlalchemy.orm import Session

from anime_api.clients import AniListClient, JikanClient, YouTubeSearchClient
from anime_api.monitoring import PipelineRunLogger
from anime_api.services import (
    AiringListOrchestrator,
    AnimeCatalogService,
    ResultCache,
    SeasonalListFetcher,
    StaticFallbackCatalog,
    build_trailer_chain,
)

if TYPE_CHECKING:
    from anime_api.settings import Settings

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@dataclass
class AppState:
    """Container for all application runtime state."""

    orchestrator: AiringListOrchestrator
    catalog: AnimeCatalogService
    cache: ResultCache
    youtube_search_enabled: bool = False
    cache_ttl_seconds: int = 0
    clients: list[Any] = field(default_factory=list)

    def close(self) -> None:
        """Close every HTTP client owned by this state."""
        for client in self.clients:
            client.close()

    def get_health_status(self) -> dict[str, Any]:
        """Generate health check status for all components."""
        status = {
            "status": "ok",
            "version": VERSION,
            "services": {}
        }

        if self.cache.ping():
            status["services"]["store"] = {"status": "ok"}
        else:
            status["services"]["store"] = {"status": "error", "error": "Store unreachable"}
            status["status"] = "degraded"

        status["services"]["top_airing"] = {
            "status": "ok",
            "cache_ttl_seconds": self.cache_ttl_seconds,
            "trailer_strategies": self.orchestrator.chain.strategy_names,
        }
        status["services"]["youtube_search"] = {
            "status": "ok" if self.youtube_search_enabled else "disabled"
        }
        return status


def build_app_state(settings: Settings, session_factory: Callable[[], Session]) -> AppState:
    """Wire clients and services from settings."""
    jikan = JikanClient(
        base_url=settings.jikan_base_url,
        timeout=settings.jikan_timeout,
        request_delay=settings.jikan_request_delay,
    )
    anilist = AniListClient(url=settings.anilist_url, timeout=settings.trailer_lookup_timeout)
    clients: list[Any] = [jikan, anilist]

    youtube = None
    if settings.youtube_search_enabled:
        youtube = YouTubeSearchClient(
            api_key=settings.youtube_api_key,
            url=settings.youtube_search_url,
            timeout=settings.trailer_lookup_timeout,
        )
        clients.append(youtube)
    else:
        logger.info("YOUTUBE_API_KEY not set; keyword trailer search disabled")

    pipeline = settings.pipeline_config()
    fallback = StaticFallbackCatalog()
    cache = ResultCache(session_factory)
    run_logger = PipelineRunLogger(settings.pipeline_log_dir) if settings.pipeline_log_dir else None

    orchestrator = AiringListOrchestrator(
        cache=cache,
        fetcher=SeasonalListFetcher(jikan, top_n=pipeline.top_n, page_size=pipeline.seasonal_page_size),
        chain=build_trailer_chain(anilist, youtube),
        fallback=fallback,
        config=pipeline,
        run_logger=run_logger,
    )
    catalog = AnimeCatalogService(
        jikan,
        fallback,
        search_limit=settings.search_limit,
        trending_limit=settings.trending_limit,
    )

    return AppState(
        orchestrator=orchestrator,
        catalog=catalog,
        cache=cache,
        youtube_search_enabled=youtube is not None,
        cache_ttl_seconds=pipeline.cache_ttl_seconds,
        clients=clients,
    )
