# File: tests/conftest.py
from __future__ import annotations

from typing import AsyncIterator, Dict, List, Optional, Tuple, Union

import pytest
from aiohttp import web

from policy_scout.config import ScoutConfig
from policy_scout.crawler.models import LinkCandidate, RenderedPage, WaitPolicy
from policy_scout.errors import RenderError

LONG_TEXT = "Privacy policy body. " * 20  # comfortably above min_content_chars

PageEntry = Union[RenderedPage, Exception, Dict[WaitPolicy, Union[RenderedPage, Exception]]]


class FakeRenderer:
    """
    Scripted renderer: ``pages`` maps URL -> page, exception, or a
    ``{WaitPolicy: page-or-exception}`` dict. Unknown URLs raise RenderError.
    Every call is recorded in ``calls`` as ``(url, wait)``.
    """

    def __init__(self, pages: Optional[Dict[str, PageEntry]] = None) -> None:
        self.pages: Dict[str, PageEntry] = dict(pages or {})
        self.calls: List[Tuple[str, WaitPolicy]] = []

    @property
    def fetched_urls(self) -> List[str]:
        return list(dict.fromkeys(url for url, _ in self.calls))

    async def render(self, url: str, wait: WaitPolicy, timeout: float) -> RenderedPage:
        self.calls.append((url, wait))
        entry = self.pages.get(url)
        if entry is None:
            raise RenderError(url, "no such page")
        if isinstance(entry, dict):
            entry = entry.get(wait, entry.get(WaitPolicy.FAST))
        if isinstance(entry, Exception):
            raise entry
        return entry


def page(url: str, text: str = LONG_TEXT, links: Optional[List[Tuple[str, str]]] = None) -> RenderedPage:
    """RenderedPage with ``links`` given as ``(text, href)`` pairs."""
    return RenderedPage(
        url=url,
        text=text,
        links=[LinkCandidate(text=t, href=h) for t, h in (links or [])],
    )


@pytest.fixture()
def basic_config(tmp_path) -> ScoutConfig:
    """Small, fast config with the cache in a temp dir."""
    return ScoutConfig(
        max_pages=10,
        fast_timeout=2.0,
        slow_timeout=2.0,
        renderer="http",
        cache_dir=tmp_path / "cache",
    )


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()
