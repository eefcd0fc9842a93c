"""Pydantic models for anime payloads returned by the API."""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from anime_api.config import PLACEHOLDER_IMAGE_URL, UNRANKED_POPULARITY, YOUTUBE_WATCH_URL


class AiringStatus(str, Enum):
    """Airing status normalized from the metadata source's free text."""
    CURRENTLY_AIRING = "currently_airing"
    FINISHED_AIRING = "finished_airing"
    UNKNOWN = "unknown"


def normalize_status(raw: Optional[str]) -> AiringStatus:
    """Map free-text status ("Currently Airing", "Finished Airing", ...) to AiringStatus."""
    if not raw:
        return AiringStatus.UNKNOWN
    text = raw.strip().lower().replace("_", " ")
    if text in ("currently airing", "airing", "releasing"):
        return AiringStatus.CURRENTLY_AIRING
    if text in ("finished airing", "finished"):
        return AiringStatus.FINISHED_AIRING
    return AiringStatus.UNKNOWN


def youtube_watch_url(youtube_id: str) -> str:
    """Build the canonical watch URL for a YouTube video id."""
    return YOUTUBE_WATCH_URL.format(youtube_id=youtube_id)


class AnimeImages(BaseModel):
    """Cover images; every size falls back to the placeholder."""
    model_config = ConfigDict(frozen=True)

    small: str = PLACEHOLDER_IMAGE_URL
    medium: str = PLACEHOLDER_IMAGE_URL
    large: str = PLACEHOLDER_IMAGE_URL


class AiredInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Optional[str] = None
    end: Optional[str] = None
    text: Optional[str] = None


class BroadcastInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: Optional[str] = None
    time: Optional[str] = None
    timezone: Optional[str] = None
    text: Optional[str] = None


class AnimeSummary(BaseModel):
    """
    A single anime as served to clients.

    Instances are frozen; enrichment and re-ranking go through
    `model_copy(update=...)` so the cached snapshot and live responses never
    share mutable state.
    """
    model_config = ConfigDict(frozen=True)

    mal_id: int
    title: str
    title_english: Optional[str] = None
    title_japanese: Optional[str] = None
    images: AnimeImages = Field(default_factory=AnimeImages)
    score: Optional[float] = None
    episodes: Optional[int] = None
    year: Optional[int] = None
    status: AiringStatus = AiringStatus.UNKNOWN
    rating: Optional[str] = None
    popularity: int = UNRANKED_POPULARITY
    rank: int = Field(default=1, ge=1)
    genres: list[str] = Field(default_factory=list)
    themes: list[str] = Field(default_factory=list)
    demographics: list[str] = Field(default_factory=list)
    studios: list[str] = Field(default_factory=list)
    trailer_url: Optional[str] = None
    trailer_youtube_id: Optional[str] = None
    synopsis: Optional[str] = None
    type: Optional[str] = None
    source: Optional[str] = None
    duration: Optional[str] = None
    aired: AiredInfo = Field(default_factory=AiredInfo)
    broadcast: BroadcastInfo = Field(default_factory=BroadcastInfo)

    @model_validator(mode="before")
    @classmethod
    def derive_trailer_url(cls, data: Any) -> Any:
        """Blank trailer fields become None; trailer_url is filled from the id when missing."""
        if not isinstance(data, dict):
            return data
        youtube_id = (data.get("trailer_youtube_id") or "").strip() or None
        url = (data.get("trailer_url") or "").strip() or None
        if youtube_id and not url:
            url = youtube_watch_url(youtube_id)
        return {**data, "trailer_youtube_id": youtube_id, "trailer_url": url}

    @property
    def has_trailer(self) -> bool:
        return bool(self.trailer_youtube_id)

    @classmethod
    def from_jikan_response(cls, data: dict) -> "AnimeSummary":
        """Create an AnimeSummary from a Jikan v4 anime object."""
        images = data.get("images", {}) or {}
        jpg_images = images.get("jpg", {}) or {}
        medium = jpg_images.get("image_url")
        small = jpg_images.get("small_image_url") or medium
        large = jpg_images.get("large_image_url") or medium

        trailer = data.get("trailer", {}) or {}
        aired = data.get("aired", {}) or {}
        aired_from = (aired.get("prop", {}) or {}).get("from", {}) or {}
        broadcast = data.get("broadcast", {}) or {}

        def extract_names(items: list) -> list[str]:
            if not items:
                return []
            return [item.get("name") for item in items if item.get("name")]

        popularity = data.get("popularity")
        # Jikan reports 0 for entries it has not ranked yet
        if not popularity:
            popularity = UNRANKED_POPULARITY

        return cls(
            mal_id=data["mal_id"],
            title=data.get("title") or "",
            title_english=data.get("title_english"),
            title_japanese=data.get("title_japanese"),
            images=AnimeImages(
                small=small or PLACEHOLDER_IMAGE_URL,
                medium=medium or PLACEHOLDER_IMAGE_URL,
                large=large or PLACEHOLDER_IMAGE_URL,
            ),
            score=data.get("score"),
            episodes=data.get("episodes"),
            year=data.get("year") or aired_from.get("year"),
            status=normalize_status(data.get("status")),
            rating=data.get("rating"),
            popularity=popularity,
            genres=extract_names(data.get("genres", [])),
            themes=extract_names(data.get("themes", [])),
            demographics=extract_names(data.get("demographics", [])),
            studios=extract_names(data.get("studios", [])),
            trailer_url=trailer.get("url") or None,
            trailer_youtube_id=trailer.get("youtube_id") or None,
            synopsis=data.get("synopsis"),
            type=data.get("type"),
            source=data.get("source"),
            duration=data.get("duration"),
            aired=AiredInfo(start=aired.get("from"), end=aired.get("to"), text=aired.get("string")),
            broadcast=BroadcastInfo(
                day=broadcast.get("day"),
                time=broadcast.get("time"),
                timezone=broadcast.get("timezone"),
                text=broadcast.get("string"),
            ),
        )


def rank_by_popularity(items: list[AnimeSummary], limit: Optional[int] = None) -> list[AnimeSummary]:
    """
    Order by ascending popularity, keep the first `limit`, and renumber ranks 1..N.

    `sorted` is stable, so entries with equal popularity keep their input order.
    """
    ordered = sorted(items, key=lambda anime: anime.popularity)
    if limit is not None:
        ordered = ordered[:limit]
    return assign_ranks(ordered)


def assign_ranks(items: list[AnimeSummary]) -> list[AnimeSummary]:
    """Return copies whose rank is their 1-based position in `items`."""
    return [anime.model_copy(update={"rank": position}) for position, anime in enumerate(items, start=1)]


class HealthResponse(BaseModel):
    status: str
    version: str
    services: dict[str, dict[str, Any]]
