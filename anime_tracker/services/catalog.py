"""Pass-through client for the external anime catalog (Jikan v4).

Payloads are relayed as decoded JSON without inspection. Nothing is cached
and nothing is retried.
"""
import logging
from datetime import date
from typing import Any, Optional

import httpx
from fastapi import Request

from anime_tracker.config import CATALOG_BASE_URL, CATALOG_TIMEOUT
from anime_tracker.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10
DEFAULT_LIMIT = 20


def current_season(month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    if month <= 3:
        return "winter"
    if month <= 6:
        return "spring"
    if month <= 9:
        return "summer"
    return "fall"


class CatalogClient:
    def __init__(
        self,
        base_url: str = CATALOG_BASE_URL,
        timeout: float = CATALOG_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _get(self, path: str, params: dict, failure: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                res = await client.get(url, params=params)
            return res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Catalog request %s failed: %r", url, e)
            raise UpstreamUnavailable(failure)

    async def search(self, query: str) -> Any:
        return await self._get(
            "/anime",
            {"q": query, "limit": SEARCH_LIMIT},
            "Failed to fetch anime data",
        )

    async def top(self, limit: int = DEFAULT_LIMIT) -> Any:
        return await self._get(
            "/top/anime",
            {"limit": limit},
            "Failed to fetch top anime",
        )

    async def seasonal(self, limit: int = DEFAULT_LIMIT, today: Optional[date] = None) -> Any:
        today = today or date.today()  # server's local calendar
        season = current_season(today.month)
        return await self._get(
            f"/seasons/{today.year}/{season}",
            {"limit": limit},
            "Failed to fetch seasonal anime",
        )


# Dependency; tests swap it through app.dependency_overrides
def get_catalog_client(request: Request) -> CatalogClient:
    return request.app.state.catalog_client
