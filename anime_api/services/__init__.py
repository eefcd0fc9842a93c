"""Domain services behind the anime endpoints."""

from .airing import AiringListOrchestrator
from .catalog import AnimeCatalogService
from .fallback import StaticFallbackCatalog
from .result_cache import CacheEntry, ResultCache
from .seasonal import SeasonalListFetcher
from .trailers import TrailerCandidate, TrailerLookupChain, build_trailer_chain

__all__ = [
    "AiringListOrchestrator",
    "AnimeCatalogService",
    "CacheEntry",
    "ResultCache",
    "SeasonalListFetcher",
    "StaticFallbackCatalog",
    "TrailerCandidate",
    "TrailerLookupChain",
    "build_trailer_chain",
]
