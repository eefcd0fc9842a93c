"""YouTube Data API keyword search for trailer videos."""
from typing import Optional

import httpx

from anime_api.config import DEFAULT_YOUTUBE_SEARCH_URL, USER_AGENT


class YouTubeSearchClient:
    """Searches YouTube for a single video matching a keyword query."""

    def __init__(
        self,
        api_key: str,
        url: str = DEFAULT_YOUTUBE_SEARCH_URL,
        timeout: float = 5.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.client = http_client or httpx.Client(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )

    def close(self):
        self.client.close()

    def search_video_id(self, query: str) -> Optional[str]:
        """
        Return the id of the top video result for `query`, or None.

        Raises:
            httpx.HTTPError: On transport failure or an error status.
            ValueError: If the response body is not valid JSON.
        """
        response = self.client.get(
            self.url,
            params={
                "part": "snippet",
                "q": query,
                "type": "video",
                "maxResults": 1,
                "key": self.api_key,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()

        items = response.json().get("items") or []
        if not items:
            return None
        video_id = (items[0].get("id") or {}).get("videoId")
        return video_id or None
