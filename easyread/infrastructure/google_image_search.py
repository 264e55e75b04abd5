"""Google Custom Search implementation of ImageSearch."""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.googleapis.com/customsearch/v1"


class GoogleImageSearch:
    """Finds a representative image for a glossary term.

    Failures are logged and reported as an empty link so a glossary is never
    held back by a missing image.
    """

    def __init__(
        self,
        api_key: str,
        cx: str,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.cx = cx
        self.timeout_seconds = timeout_seconds
        self._client = client

    async def find_image(self, query: str) -> str:
        params = {
            "key": self.api_key,
            "cx": self.cx,
            "q": query,
            "searchType": "image",
            "num": 1,
        }
        try:
            if self._client is not None:
                resp = await self._client.get(SEARCH_URL, params=params)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    resp = await client.get(SEARCH_URL, params=params)
            resp.raise_for_status()
            items = resp.json().get("items") or []
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Image search failed for '{query}': {e}")
            return ""

        return items[0].get("link", "") if items else ""
