"""
Outbound HTTP

One shared httpx.AsyncClient for every external source (search APIs,
Wikidata, Wikipedia, DuckDuckGo, YouTube). Every request carries the
configured timeout and User-Agent.

Errors are NOT swallowed here: adapters decide what a failure means.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class HttpFetcher:
    def __init__(
        self,
        timeout_seconds: float = 5.0,
        user_agent: str = "AI-Placement-Helper/1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        # tests pass an httpx.MockTransport here
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout_seconds,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET and decode JSON. Raises httpx errors and ValueError on bad JSON."""
        client = self._get_client()
        response = await client.get(url, params=params, headers=headers)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("HTTP client closed")
