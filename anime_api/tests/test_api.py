from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

import anime_api.main as api
from anime_api.app_state import AppState
from anime_api.clients.jikan import AnimeNotFoundError, JikanError
from anime_api.database import get_db
from anime_api.services import AiringListOrchestrator, AnimeCatalogService, ResultCache
from anime_api.services.fallback import StaticFallbackCatalog


@pytest.fixture()
def app_state(make_anime):
    orchestrator = MagicMock(spec=AiringListOrchestrator)
    orchestrator.chain = MagicMock()
    orchestrator.chain.strategy_names = ["anilist_title", "anilist_english", "static_table"]
    orchestrator.get_top_airing_anime.return_value = [
        make_anime(1, title="First", rank=1, trailer_youtube_id="trailer0001"),
        make_anime(2, title="Second", rank=2),
    ]
    catalog = MagicMock(spec=AnimeCatalogService)
    cache = MagicMock(spec=ResultCache)
    cache.ping.return_value = True
    return AppState(
        orchestrator=orchestrator,
        catalog=catalog,
        cache=cache,
        youtube_search_enabled=False,
        cache_ttl_seconds=7200,
    )


@pytest.fixture()
def client(app_state, session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    api.app.dependency_overrides[get_db] = override_get_db
    api.limiter.reset()
    with patch('anime_api.main.build_app_state', return_value=app_state):
        with TestClient(api.app) as test_client:
            yield test_client
    api.app.dependency_overrides.clear()


def test_health_endpoint(client):
    """Test the health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["services"]["store"]["status"] == "ok"
    assert data["services"]["youtube_search"]["status"] == "disabled"
    assert data["services"]["top_airing"]["cache_ttl_seconds"] == 7200


def test_health_degraded_when_store_down(client, app_state):
    app_state.cache.ping.return_value = False
    data = client.get("/").json()
    assert data["status"] == "degraded"
    assert data["services"]["store"]["status"] == "error"


def test_top_airing(client, app_state):
    response = client.get("/anime/top-airing")
    assert response.status_code == 200
    payload = response.json()
    assert [item["rank"] for item in payload] == [1, 2]
    assert payload[0]["trailer_youtube_id"] == "trailer0001"
    assert payload[0]["trailer_url"] == "https://www.youtube.com/watch?v=trailer0001"
    assert payload[1]["trailer_url"] is None
    assert payload[0]["status"] == "unknown"
    app_state.orchestrator.get_top_airing_anime.assert_called_once()


def test_top_airing_serves_static_catalog(client, app_state):
    app_state.orchestrator.get_top_airing_anime.return_value = StaticFallbackCatalog().snapshot()
    payload = client.get("/anime/top-airing").json()
    assert len(payload) == 5
    assert all(item["trailer_url"] for item in payload)


@pytest.mark.parametrize("query", ["", "%20%20"])
def test_search_empty_query(client, app_state, query):
    """Empty query string returns no results without calling upstream."""
    response = client.get(f"/anime/search?q={query}")
    assert response.status_code == 200
    assert response.json() == []
    app_state.catalog.search.assert_not_called()


def test_search_missing_query(client, app_state):
    """Omitted query parameter behaves like an empty one."""
    response = client.get("/anime/search")
    assert response.status_code == 200
    assert response.json() == []


def test_search_valid_query(client, app_state, make_anime):
    app_state.catalog.search.return_value = [make_anime(20, title="Naruto", rank=1)]

    response = client.get("/anime/search?q=naruto")

    assert response.status_code == 200
    assert response.json()[0]["title"] == "Naruto"
    app_state.catalog.search.assert_called_once_with("naruto")


def test_search_query_too_long(client):
    response = client.get(f"/anime/search?q={'a' * 101}")
    assert response.status_code == 400
    assert "Query too long" in response.json()["detail"]


def test_search_upstream_failure(client, app_state):
    app_state.catalog.search.side_effect = JikanError("down", status_code=503)
    response = client.get("/anime/search?q=naruto")
    assert response.status_code == 502


def test_trending(client, app_state):
    app_state.catalog.trending.return_value = StaticFallbackCatalog().trending()
    response = client.get("/anime/trending")
    assert response.status_code == 200
    assert [item["rank"] for item in response.json()] == [1, 2, 3, 4, 5]


def test_get_anime_by_id(client, app_state, make_anime):
    app_state.catalog.get_anime.return_value = make_anime(52991, title="Sousou no Frieren")

    response = client.get("/anime/52991")

    assert response.status_code == 200
    assert response.json()["mal_id"] == 52991
    assert app_state.catalog.get_anime.call_args.args[1] == 52991


def test_get_anime_not_found(client, app_state):
    app_state.catalog.get_anime.side_effect = AnimeNotFoundError("missing", status_code=404)
    response = client.get("/anime/999999")
    assert response.status_code == 404


def test_get_anime_upstream_failure(client, app_state):
    app_state.catalog.get_anime.side_effect = JikanError("down", status_code=500)
    response = client.get("/anime/1")
    assert response.status_code == 502


@pytest.mark.parametrize("anime_id", ["abc", "0", "-4"])
def test_get_anime_invalid_id(client, app_state, anime_id):
    response = client.get(f"/anime/{anime_id}")
    assert response.status_code == 422
    app_state.catalog.get_anime.assert_not_called()
