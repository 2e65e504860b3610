# policy_scout/crawler/browser.py
"""
Headless-browser renderer built on Playwright (Chromium).

One browser process lives for the lifetime of the renderer. Every render runs
in its own browser context, which is closed before ``render`` returns, so
cookies and storage never carry over from one page to the next.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from playwright.async_api import Browser, Error as PlaywrightError, Page, Playwright, async_playwright

from policy_scout.config import ScoutConfig
from policy_scout.crawler.models import LinkCandidate, RenderedPage, WaitPolicy
from policy_scout.errors import RenderError
from policy_scout.logger import get_logger

logger = get_logger("browser")

_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]
_BODY_TEXT_JS = "() => (document.body && document.body.innerText) || ''"
_ANCHORS_JS = "els => els.map(a => ({text: (a.innerText || '').trim(), href: a.href || ''}))"


class BrowserRenderer:
    """Renders pages in headless Chromium and reads text and anchors from the live DOM."""

    def __init__(self, config: ScoutConfig) -> None:
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def __aenter__(self) -> BrowserRenderer:
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless, args=_LAUNCH_ARGS
            )
        except PlaywrightError:
            await self._playwright.stop()
            self._playwright = None
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[Page]:
        """Scoped rendering session: a fresh context and page, always closed."""
        if self._browser is None:
            raise RuntimeError("Browser not started")
        context = await self._browser.new_context(
            user_agent=self.config.user_agent,
            viewport={"width": self.config.viewport_width, "height": self.config.viewport_height},
        )
        try:
            yield await context.new_page()
        finally:
            await context.close()

    def _wait_until(self, wait: WaitPolicy) -> str:
        return self.config.fast_wait if wait is WaitPolicy.FAST else self.config.slow_wait

    async def render(self, url: str, wait: WaitPolicy, timeout: float) -> RenderedPage:
        wait_until = self._wait_until(wait)
        logger.debug("Rendering %s (wait_until=%s, %.1fs)", url, wait_until, timeout)
        try:
            async with self.session() as page:
                await page.goto(url, wait_until=wait_until, timeout=timeout * 1000)
                text: str = await page.evaluate(_BODY_TEXT_JS)
                anchors: List[Dict[str, Any]] = await page.eval_on_selector_all("a", _ANCHORS_JS)
        except PlaywrightError as exc:
            raise RenderError(url, exc.message) from exc

        links = [
            LinkCandidate(text=str(a.get("text") or ""), href=str(a["href"]))
            for a in anchors
            if a.get("href")
        ]
        return RenderedPage(url=url, text=text or "", links=links)
