"""Anime metadata API: search, trending, top airing with trailers, and lookup by id."""
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Path, Request, APIRouter, status
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from anime_api.app_state import AppState, build_app_state
from anime_api.clients.jikan import AnimeNotFoundError, JikanError
from anime_api.config import MAX_QUERY_LENGTH
from anime_api.database import SessionLocal, get_db, init_db
from anime_api.schemas import AnimeSummary, HealthResponse
from anime_api.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
anime_router = APIRouter(prefix="/anime", tags=["Anime"])


def get_app_state(request: Request) -> AppState:
    """Dependency injection for application state."""
    return request.app.state.app_state


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables if configured and wire upstream clients."""
    if settings.auto_create_tables:
        logger.info("Ensuring database tables exist...")
        init_db()

    app_state = build_app_state(settings, SessionLocal)
    app.state.app_state = app_state
    logger.info("Startup complete")

    yield

    logger.info("Shutting down")
    app_state.close()


app = FastAPI(
    title="Anime Galaxy API",
    version="1.0.0",
    lifespan=lifespan
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log request method, path, status, and duration."""
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    if request.url.path not in ["/health", "/"]:
        logger.info(f"{request.method} {request.url.path} | Status: {response.status_code} | Duration: {duration:.3f}s")

    return response


@app.get("/", response_model=HealthResponse)
def root(app_state: AppState = Depends(get_app_state)):
    """Root endpoint mirrors the health check."""
    return app_state.get_health_status()


@app.get("/health", response_model=HealthResponse)
def health(app_state: AppState = Depends(get_app_state)):
    """Health check endpoint for monitoring."""
    return app_state.get_health_status()


@anime_router.get("/search", response_model=list[AnimeSummary])
@limiter.limit("60/minute")
def search_anime(
    request: Request,
    q: str = "",
    app_state: AppState = Depends(get_app_state)
):
    """Search anime by title. Blank queries return an empty list without calling upstream."""
    query = (q or "").strip()
    if not query:
        return []

    if len(query) > MAX_QUERY_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Query too long (max {MAX_QUERY_LENGTH} chars)"
        )

    try:
        return app_state.catalog.search(query)
    except JikanError:
        logger.exception(f"Error searching anime with query: {query}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Anime search is unavailable")


@anime_router.get("/trending", response_model=list[AnimeSummary])
@limiter.limit("30/minute")
def trending_anime(request: Request, app_state: AppState = Depends(get_app_state)):
    """Most popular anime right now."""
    return app_state.catalog.trending()


@anime_router.get("/top-airing", response_model=list[AnimeSummary])
@limiter.limit("30/minute")
def top_airing_anime(request: Request, app_state: AppState = Depends(get_app_state)):
    """Top airing anime with trailers. Always returns a list."""
    return app_state.orchestrator.get_top_airing_anime()


@anime_router.get("/{anime_id}", response_model=AnimeSummary)
@limiter.limit("60/minute")
def get_anime(
    request: Request,
    anime_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    app_state: AppState = Depends(get_app_state)
):
    """Single anime by MyAnimeList id, served from the record cache when stored."""
    try:
        return app_state.catalog.get_anime(db, anime_id)
    except AnimeNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Anime {anime_id} not found")
    except JikanError:
        logger.exception(f"Error fetching anime {anime_id}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Anime lookup is unavailable")


app.include_router(anime_router)


if __name__ == "__main__":
    uvicorn.run("anime_api.main:app", host="0.0.0.0", port=8000, reload=True)
