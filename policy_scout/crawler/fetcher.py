# policy_scout/crawler/fetcher.py
"""
Plain HTTP renderer: aiohttp GET + BeautifulSoup parsing.

Suitable for server-rendered sites and for tests. Scripted content is not
executed, so the wait policy has no effect here.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout, DummyCookieJar

from policy_scout.config import ScoutConfig
from policy_scout.crawler.link_extractor import parse_page
from policy_scout.crawler.models import RenderedPage, WaitPolicy
from policy_scout.errors import RenderError
from policy_scout.logger import get_logger

logger = get_logger("fetcher")


class HttpRenderer:
    """Fetches pages over HTTP; one request per render, no cookies kept."""

    def __init__(self, config: ScoutConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> HttpRenderer:
        if self.session is None:
            self.session = ClientSession(
                headers={"User-Agent": self.config.user_agent},
                cookie_jar=DummyCookieJar(),
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
        if self._owns_session:
            self.session = None

    async def render(self, url: str, wait: WaitPolicy, timeout: float) -> RenderedPage:
        """
        Fetch *url* and return its text and anchors.

        Raises RenderError on network failure, timeout, HTTP error status or a
        non-text response.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        logger.debug("GET %s (%s, %.1fs)", url, wait.value, timeout)
        try:
            async with self.session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                if resp.status >= 400:
                    raise RenderError(url, f"HTTP {resp.status}")
                ctype = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                body = await resp.text(errors="replace")
                final_url = str(resp.url)
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
            raise RenderError(url, str(exc) or type(exc).__name__) from exc

        if "html" in ctype:
            page = parse_page(final_url, body)
            page.url = url
            return page
        if ctype.startswith("text/"):
            return RenderedPage(url=url, text=body)
        raise RenderError(url, f"unsupported content type {ctype or 'unknown'}")
