"""Jikan API client for anime metadata from MyAnimeList."""
import logging
from typing import Optional

import httpx

from anime_api.config import DEFAULT_JIKAN_BASE_URL, USER_AGENT
from anime_api.rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class JikanError(Exception):
    """The metadata source could not produce a usable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AnimeNotFoundError(JikanError):
    """The metadata source has no anime with the requested id."""


class JikanClient:
    """Read-only client for the Jikan v4 REST API."""

    def __init__(
        self,
        base_url: str = DEFAULT_JIKAN_BASE_URL,
        timeout: float = 10.0,
        request_delay: float = 0.4,
        http_client: Optional[httpx.Client] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.rate_limiter = rate_limiter or RateLimiter(min_interval=request_delay)
        self.client = http_client or httpx.Client(
            timeout=timeout,
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
        )
        logger.info(f"JikanClient initialized ({self.base_url})")

    def close(self):
        """Close the HTTP client."""
        self.client.close()

    def _make_request(self, endpoint: str, params: Optional[dict] = None) -> dict:
        """Make a single rate-limited request. Failures are raised as JikanError."""
        url = f"{self.base_url}{endpoint}"
        self.rate_limiter.wait()
        try:
            response = self.client.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 404:
                raise AnimeNotFoundError(f"Not found: {endpoint}", status_code=404) from e
            raise JikanError(f"Jikan returned {status_code} for {endpoint}", status_code=status_code) from e
        except httpx.HTTPError as e:
            raise JikanError(f"Request to {endpoint} failed: {e}") from e
        except ValueError as e:
            raise JikanError(f"Malformed JSON from {endpoint}: {e}") from e

        if not isinstance(payload, dict):
            raise JikanError(f"Unexpected payload from {endpoint}")
        return payload

    def _list_data(self, response: dict, endpoint: str) -> list[dict]:
        data = response.get("data", [])
        if not isinstance(data, list):
            raise JikanError(f"Expected a list from {endpoint}")
        return data

    def fetch_anime_by_id(self, mal_id: int) -> dict:
        """Fetch a single anime object by its MyAnimeList ID."""
        endpoint = f"/anime/{mal_id}"
        data = self._make_request(endpoint).get("data")
        if not isinstance(data, dict):
            raise AnimeNotFoundError(f"Anime {mal_id} not found", status_code=404)
        return data

    def search_anime(self, query: str, limit: int = 20) -> list[dict]:
        """Free-text search over anime titles."""
        endpoint = "/anime"
        response = self._make_request(endpoint, params={"q": query, "limit": limit})
        return self._list_data(response, endpoint)

    def fetch_current_season(self, limit: int = 25) -> list[dict]:
        """Fetch the first page of anime airing in the current season."""
        endpoint = "/seasons/now"
        response = self._make_request(endpoint, params={"limit": limit})
        data = self._list_data(response, endpoint)
        logger.info(f"Fetched {len(data)} currently airing anime")
        return data

    def fetch_top_anime(self, limit: int = 25, filter_type: Optional[str] = None) -> list[dict]:
        """Fetch the first page of MAL's top anime, optionally filtered (airing, bypopularity, ...)."""
        endpoint = "/top/anime"
        params = {"limit": limit}
        if filter_type:
            params["filter"] = filter_type
        response = self._make_request(endpoint, params=params)
        data = self._list_data(response, endpoint)
        logger.info(f"Fetched {len(data)} top anime (filter={filter_type or 'none'})")
        return data
