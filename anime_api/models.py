from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, JSON, String, Text

from anime_api.database import Base


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ApiCache(Base):
    """One JSON payload per logical cache key, valid until expires_at."""
    __tablename__ = "api_cache"

    key = Column(String(255), primary_key=True)

    value = Column(Text, nullable=False)

    expires_at = Column(DateTime, nullable=False, index=True)

    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<ApiCache(key={self.key}, expires_at={self.expires_at})>"


class AnimeRecord(Base):
    """Long-lived copy of an anime fetched by id from the metadata source."""
    __tablename__ = "anime"

    mal_id = Column(Integer, primary_key=True, autoincrement=False)

    title = Column(String(512), nullable=False)
    title_english = Column(String(512), nullable=True)
    title_japanese = Column(String(512), nullable=True)

    synopsis = Column(Text, nullable=True)

    small_image_url = Column(String(1024), nullable=True)
    image_url = Column(String(1024), nullable=True)
    large_image_url = Column(String(1024), nullable=True)

    score = Column(Float, nullable=True)
    episodes = Column(Integer, nullable=True)
    year = Column(Integer, nullable=True)
    status = Column(String(32), nullable=True)
    rating = Column(String(64), nullable=True)
    popularity = Column(Integer, nullable=True)
    type = Column(String(32), nullable=True)
    source = Column(String(64), nullable=True)
    duration = Column(String(64), nullable=True)

    genres = Column(JSON, nullable=False, default=list)
    themes = Column(JSON, nullable=False, default=list)
    demographics = Column(JSON, nullable=False, default=list)
    studios = Column(JSON, nullable=False, default=list)

    trailer_url = Column(String(512), nullable=True)
    trailer_youtube_id = Column(String(64), nullable=True)

    aired_from = Column(String(64), nullable=True)
    aired_to = Column(String(64), nullable=True)
    aired_text = Column(String(255), nullable=True)

    broadcast_day = Column(String(32), nullable=True)
    broadcast_time = Column(String(16), nullable=True)
    broadcast_timezone = Column(String(64), nullable=True)
    broadcast_text = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<AnimeRecord(mal_id={self.mal_id}, title={self.title})>"
