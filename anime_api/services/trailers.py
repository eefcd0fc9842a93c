"""
Trailer resolution through an ordered chain of lookup strategies.

Each strategy answers with `Match` or `NoMatch`; a failing upstream is a
`NoMatch`, so moving on to the next strategy is ordinary control flow.
Strategies run in order and the chain stops at the first `Match`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence, Union

import httpx

from anime_api.clients.anilist import AniListClient
from anime_api.clients.youtube import YouTubeSearchClient
from anime_api.fallback_data import STATIC_TRAILER_KEYWORDS, STATIC_TRAILERS_BY_ID
from anime_api.schemas import AnimeSummary, youtube_watch_url

logger = logging.getLogger(__name__)

# Errors a network strategy converts into NoMatch
LOOKUP_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)


@dataclass(frozen=True)
class TrailerCandidate:
    youtube_id: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_youtube_id(cls, youtube_id: str) -> "TrailerCandidate":
        return cls(youtube_id=youtube_id, url=youtube_watch_url(youtube_id))


NO_TRAILER = TrailerCandidate()


@dataclass(frozen=True)
class Match:
    candidate: TrailerCandidate
    strategy: str


@dataclass(frozen=True)
class NoMatch:
    strategy: str
    reason: str = "not found"


LookupOutcome = Union[Match, NoMatch]


class TrailerStrategy(Protocol):
    name: str

    def applies_to(self, anime: AnimeSummary) -> bool:
        ...

    def lookup(self, anime: AnimeSummary) -> LookupOutcome:
        ...


class AniListTitleStrategy:
    """Graph lookup by native title, or by English title when `use_english` is set."""

    def __init__(self, client: AniListClient, use_english: bool = False):
        self.client = client
        self.use_english = use_english
        self.name = "anilist_english" if use_english else "anilist_title"

    def _search_title(self, anime: AnimeSummary) -> Optional[str]:
        return anime.title_english if self.use_english else anime.title

    def applies_to(self, anime: AnimeSummary) -> bool:
        title = self._search_title(anime)
        if not title:
            return False
        if self.use_english:
            # Same string as the native title was already searched
            return title != anime.title
        return True

    def lookup(self, anime: AnimeSummary) -> LookupOutcome:
        title = self._search_title(anime)
        try:
            youtube_id = self.client.find_trailer_id(title)
        except LOOKUP_ERRORS as e:
            logger.warning(f"AniList trailer lookup failed for '{title}': {e}")
            return NoMatch(self.name, reason=f"error: {e}")
        if youtube_id:
            return Match(TrailerCandidate.from_youtube_id(youtube_id), self.name)
        return NoMatch(self.name)


class YouTubeSearchStrategy:
    """Keyword video search; only built when an API key is configured."""

    name = "youtube_search"

    def __init__(self, client: YouTubeSearchClient, query_suffix: str = "official trailer"):
        self.client = client
        self.query_suffix = query_suffix

    def applies_to(self, anime: AnimeSummary) -> bool:
        return bool(anime.title)

    def lookup(self, anime: AnimeSummary) -> LookupOutcome:
        query = f"{anime.title} {self.query_suffix}".strip()
        try:
            youtube_id = self.client.search_video_id(query)
        except LOOKUP_ERRORS as e:
            logger.warning(f"YouTube search failed for '{query}': {e}")
            return NoMatch(self.name, reason=f"error: {e}")
        if youtube_id:
            return Match(TrailerCandidate.from_youtube_id(youtube_id), self.name)
        return NoMatch(self.name)


class StaticTrailerStrategy:
    """Hardcoded trailers: exact id first, then the most specific title keyword."""

    name = "static_table"

    def __init__(
        self,
        by_id: Mapping[int, str] = STATIC_TRAILERS_BY_ID,
        keywords: Sequence[tuple[str, str]] = STATIC_TRAILER_KEYWORDS,
    ):
        self.by_id = by_id
        self.keywords = tuple((keyword.lower(), youtube_id) for keyword, youtube_id in keywords)

    def applies_to(self, anime: AnimeSummary) -> bool:
        return True

    def match_keyword(self, *titles: Optional[str]) -> Optional[str]:
        """Longest keyword contained in any title; ties go to the earlier keyword."""
        haystacks = [title.lower() for title in titles if title]
        best: Optional[tuple[str, str]] = None
        for keyword, youtube_id in self.keywords:
            if not any(keyword in haystack for haystack in haystacks):
                continue
            if best is None or len(keyword) > len(best[0]):
                best = (keyword, youtube_id)
        return best[1] if best else None

    def lookup(self, anime: AnimeSummary) -> LookupOutcome:
        youtube_id = self.by_id.get(anime.mal_id)
        if youtube_id is None:
            youtube_id = self.match_keyword(anime.title, anime.title_english)
        if youtube_id:
            return Match(TrailerCandidate.from_youtube_id(youtube_id), self.name)
        return NoMatch(self.name)


class TrailerLookupChain:
    """Tries each strategy in order and returns the first trailer found."""

    def __init__(self, strategies: Sequence[TrailerStrategy]):
        self.strategies = tuple(strategies)

    @property
    def strategy_names(self) -> list[str]:
        return [strategy.name for strategy in self.strategies]

    def resolve(self, anime: AnimeSummary) -> TrailerCandidate:
        for strategy in self.strategies:
            if not strategy.applies_to(anime):
                continue
            outcome = strategy.lookup(anime)
            if isinstance(outcome, Match):
                logger.debug(f"Trailer for {anime.mal_id} found by {outcome.strategy}")
                return outcome.candidate
            logger.debug(f"{outcome.strategy} found no trailer for {anime.mal_id} ({outcome.reason})")

        logger.info(f"No trailer found for {anime.mal_id} '{anime.title}'")
        return NO_TRAILER


def build_trailer_chain(
    anilist: AniListClient,
    youtube: Optional[YouTubeSearchClient] = None,
) -> TrailerLookupChain:
    """Assemble the standard chain; keyword search is left out without a client."""
    strategies: list[TrailerStrategy] = [
        AniListTitleStrategy(anilist),
        AniListTitleStrategy(anilist, use_english=True),
    ]
    if youtube is not None:
        strategies.append(YouTubeSearchStrategy(youtube))
    strategies.append(StaticTrailerStrategy())
    return TrailerLookupChain(strategies)
