"""
Database configuration and session management.

Configures the SQLAlchemy engine for the persistent store (PostgreSQL in
production, SQLite locally) and provides the FastAPI session dependency.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from anime_api.settings import settings

DATABASE_URL = settings.database_url

Base = declarative_base()


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Yield database session with automatic cleanup."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create any missing tables. Alembic migrations remain the production path."""
    # Register the mapped classes on Base.metadata
    from anime_api import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
