"""
Pytest configuration - runs before any test imports.

Environment variables are set here, before `anime_api.settings` is imported
and validated. Tests use in-memory SQLite databases, never the configured
store.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.pop("YOUTUBE_API_KEY", None)
os.environ.pop("PIPELINE_LOG_DIR", None)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from anime_api.database import Base
from anime_api.schemas import AnimeSummary


@pytest.fixture
def engine():
    """Fresh in-memory database with all tables."""
    from anime_api import models  # noqa: F401

    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def make_anime():
    """Build an AnimeSummary with sensible defaults."""
    def _make(mal_id: int = 1, title: str | None = None, **overrides) -> AnimeSummary:
        fields = {"mal_id": mal_id, "title": title or f"Anime {mal_id}"}
        fields.update(overrides)
        return AnimeSummary(**fields)
    return _make


@pytest.fixture
def jikan_item():
    """Build a raw Jikan v4 anime object."""
    def _make(mal_id: int = 1, title: str | None = None, popularity: int | None = 100, **overrides) -> dict:
        item = {
            "mal_id": mal_id,
            "title": title or f"Anime {mal_id}",
            "title_english": None,
            "title_japanese": None,
            "images": {
                "jpg": {
                    "image_url": f"https://cdn.example.com/{mal_id}.jpg",
                    "small_image_url": f"https://cdn.example.com/{mal_id}t.jpg",
                    "large_image_url": f"https://cdn.example.com/{mal_id}l.jpg",
                }
            },
            "trailer": {"youtube_id": None, "url": None, "embed_url": None},
            "score": 7.5,
            "episodes": 12,
            "year": 2026,
            "status": "Currently Airing",
            "rating": "PG-13 - Teens 13 or older",
            "popularity": popularity,
            "genres": [{"mal_id": 1, "type": "anime", "name": "Action", "url": ""}],
            "themes": [],
            "demographics": [],
            "studios": [{"mal_id": 10, "type": "anime", "name": "Studio A", "url": ""}],
            "synopsis": "A synopsis.",
            "type": "TV",
            "source": "Manga",
            "duration": "24 min per ep",
            "aired": {"from": "2026-10-01T00:00:00+00:00", "to": None, "string": "Oct 1, 2026 to ?"},
            "broadcast": {"day": "Fridays", "time": "23:00", "timezone": "Asia/Tokyo", "string": "Fridays at 23:00 (JST)"},
        }
        item.update(overrides)
        return item
    return _make
