"""AniList GraphQL client used to look up trailers by title."""
from typing import Optional

import httpx

from anime_api.config import DEFAULT_ANILIST_URL, USER_AGENT

TRAILER_QUERY = """
query ($search: String!) {
  Media(search: $search, type: ANIME) {
    id
    idMal
    title { romaji english native }
    trailer { id site }
  }
}
"""


class AniListClient:
    """Minimal AniList client: one query, one trailer id."""

    def __init__(
        self,
        url: str = DEFAULT_ANILIST_URL,
        timeout: float = 5.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.client = http_client or httpx.Client(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )

    def close(self):
        self.client.close()

    def find_trailer_id(self, title: str) -> Optional[str]:
        """
        Return the YouTube id of the best title match's trailer, or None.

        Raises:
            httpx.HTTPError: On transport failure or a non-404 error status.
            ValueError: If the response body is not valid JSON.
        """
        response = self.client.post(
            self.url,
            json={"query": TRAILER_QUERY, "variables": {"search": title}},
            timeout=self.timeout,
        )
        # AniList answers 404 when no media matches the search
        if response.status_code == 404:
            return None
        response.raise_for_status()

        media = (response.json().get("data") or {}).get("Media") or {}
        trailer = media.get("trailer") or {}
        if trailer.get("site") == "youtube" and trailer.get("id"):
            return trailer["id"]
        return None
