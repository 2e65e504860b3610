# File: policy_scout/search.py
"""policy_scout.search: web-search fallback (Brave Search API).

Used only when the landing page has no policy link. Every failure, including a
missing API key, is logged and reported as "no result"; nothing is raised to
the caller.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from policy_scout.config import ScoutConfig
from policy_scout.crawler.relevance import hostname_of
from policy_scout.errors import FallbackAPIError, ParseError
from policy_scout.logger import get_logger

__all__ = ("BraveSearch", "build_query")

logger = get_logger("search")


def build_query(site_url: str) -> str:
    """``"<hostname without leading www.> privacy policy"``."""
    return f"{hostname_of(site_url).removeprefix('www.')} privacy policy"


class BraveSearch:
    """Finds a policy page for a site through the Brave web-search API."""

    def __init__(self, config: ScoutConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session

    async def search(self, site_url: str) -> Optional[str]:
        """Return the first result URL for the site's policy query, or None."""
        if not self.config.search_api_key:
            logger.error("Search API key is missing; set BRAVE_API_KEY or search_api_key")
            return None
        try:
            query = build_query(site_url)
        except ParseError as exc:
            logger.error("Cannot build search query: %s", exc)
            return None

        try:
            results = await self._query(query)
        except FallbackAPIError as exc:
            logger.error("Error fetching search results: %s", exc)
            return None

        if not results:
            logger.info("No relevant results found via search for %r", query)
            return None
        for i, r in enumerate(results, start=1):
            logger.info("Search result %d: %s", i, r.get("url"))
        url = results[0].get("url")
        return url if isinstance(url, str) and url else None

    async def _query(self, query: str) -> list[dict[str, Any]]:
        headers = {
            "Accept": "application/json",
            "X-Subscription-Token": self.config.search_api_key or "",
        }
        params = {"q": query, "count": str(self.config.search_count)}
        timeout = ClientTimeout(total=self.config.search_timeout)
        try:
            if self.session is not None:
                return await self._get(self.session, headers, params, timeout)
            async with ClientSession() as session:
                return await self._get(session, headers, params, timeout)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FallbackAPIError(f"{type(exc).__name__}: {exc}") from exc

    async def _get(
        self,
        session: ClientSession,
        headers: dict[str, str],
        params: dict[str, str],
        timeout: ClientTimeout,
    ) -> list[dict[str, Any]]:
        async with session.get(
            self.config.search_endpoint, headers=headers, params=params, timeout=timeout
        ) as resp:
            if resp.status != 200:
                raise FallbackAPIError(f"search API returned HTTP {resp.status}", status=resp.status)
            payload = await resp.json(content_type=None)
        web = payload.get("web") if isinstance(payload, dict) else None
        results = web.get("results") if isinstance(web, dict) else None
        if not isinstance(results, list):
            return []
        return [r for r in results if isinstance(r, dict)]
