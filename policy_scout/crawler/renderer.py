# policy_scout/crawler/renderer.py
"""Rendering collaborator interface and factory."""
from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable

from policy_scout.config import ScoutConfig
from policy_scout.crawler.models import RenderedPage, WaitPolicy
from policy_scout.errors import RenderError

__all__ = ("Renderer", "create_renderer", "render_with_deadline", "RENDER_GRACE")

RENDER_GRACE = 5.0


@runtime_checkable
class Renderer(Protocol):
    """Loads one URL and returns its text and anchors.

    Implementations raise :class:`~policy_scout.errors.RenderError` on
    navigation timeout or network failure and release whatever they opened
    for the page before returning.
    """

    async def render(self, url: str, wait: WaitPolicy, timeout: float) -> RenderedPage: ...


def create_renderer(config: ScoutConfig):
    """Build the renderer named by ``config.renderer`` (an async context manager)."""
    if config.renderer == "http":
        from policy_scout.crawler.fetcher import HttpRenderer

        return HttpRenderer(config)
    from policy_scout.crawler.browser import BrowserRenderer

    return BrowserRenderer(config)


async def render_with_deadline(
    renderer: Renderer, url: str, wait: WaitPolicy, timeout: float
) -> RenderedPage:
    """Call ``renderer.render`` and give up ``RENDER_GRACE`` seconds past its own timeout.

    A renderer that hangs past its navigation timeout surfaces as RenderError.
    Cancellation of the calling task propagates unchanged.
    """
    deadline = timeout + RENDER_GRACE
    try:
        return await asyncio.wait_for(renderer.render(url, wait, timeout), timeout=deadline)
    except asyncio.TimeoutError as exc:
        raise RenderError(url, f"render exceeded {deadline:.0f}s") from exc
