"""Record-cache queries backing GET /anime/{id}."""
import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from anime_api.models import AnimeRecord, utcnow
from anime_api.schemas import AiredInfo, AnimeImages, AnimeSummary, BroadcastInfo, normalize_status

logger = logging.getLogger(__name__)


def record_to_summary(record: AnimeRecord) -> AnimeSummary:
    """Rebuild an AnimeSummary from a stored row."""
    images = {
        key: value
        for key, value in (
            ("small", record.small_image_url),
            ("medium", record.image_url),
            ("large", record.large_image_url),
        )
        if value
    }
    fields = dict(
        mal_id=record.mal_id,
        title=record.title,
        title_english=record.title_english,
        title_japanese=record.title_japanese,
        images=AnimeImages(**images),
        score=record.score,
        episodes=record.episodes,
        year=record.year,
        status=normalize_status(record.status),
        rating=record.rating,
        genres=list(record.genres or []),
        themes=list(record.themes or []),
        demographics=list(record.demographics or []),
        studios=list(record.studios or []),
        trailer_url=record.trailer_url,
        trailer_youtube_id=record.trailer_youtube_id,
        synopsis=record.synopsis,
        type=record.type,
        source=record.source,
        duration=record.duration,
        aired=AiredInfo(start=record.aired_from, end=record.aired_to, text=record.aired_text),
        broadcast=BroadcastInfo(
            day=record.broadcast_day,
            time=record.broadcast_time,
            timezone=record.broadcast_timezone,
            text=record.broadcast_text,
        ),
    )
    if record.popularity is not None:
        fields["popularity"] = record.popularity
    return AnimeSummary(**fields)


def summary_to_record(anime: AnimeSummary) -> AnimeRecord:
    return AnimeRecord(
        mal_id=anime.mal_id,
        title=anime.title,
        title_english=anime.title_english,
        title_japanese=anime.title_japanese,
        synopsis=anime.synopsis,
        small_image_url=anime.images.small,
        image_url=anime.images.medium,
        large_image_url=anime.images.large,
        score=anime.score,
        episodes=anime.episodes,
        year=anime.year,
        status=anime.status.value,
        rating=anime.rating,
        popularity=anime.popularity,
        type=anime.type,
        source=anime.source,
        duration=anime.duration,
        genres=list(anime.genres),
        themes=list(anime.themes),
        demographics=list(anime.demographics),
        studios=list(anime.studios),
        trailer_url=anime.trailer_url,
        trailer_youtube_id=anime.trailer_youtube_id,
        aired_from=anime.aired.start,
        aired_to=anime.aired.end,
        aired_text=anime.aired.text,
        broadcast_day=anime.broadcast.day,
        broadcast_time=anime.broadcast.time,
        broadcast_timezone=anime.broadcast.timezone,
        broadcast_text=anime.broadcast.text,
    )


def get_cached_anime(db: Session, mal_id: int) -> Optional[AnimeSummary]:
    """Look up a stored anime by external id. Store faults read as a miss."""
    try:
        record = db.query(AnimeRecord).filter(AnimeRecord.mal_id == mal_id).first()
        if record is None:
            return None
        return record_to_summary(record)
    except (SQLAlchemyError, ValidationError) as e:
        logger.warning(f"Anime record lookup failed for {mal_id}: {e}")
        db.rollback()
        return None


def store_anime(db: Session, anime: AnimeSummary) -> bool:
    """Upsert an anime into the record cache. Returns False if the write failed."""
    try:
        record = summary_to_record(anime)
        record.updated_at = utcnow()
        db.merge(record)
        db.commit()
        logger.info(f"Stored anime {anime.mal_id} in record cache")
        return True
    except SQLAlchemyError as e:
        logger.warning(f"Failed to store anime {anime.mal_id}: {e}")
        db.rollback()
        return False
