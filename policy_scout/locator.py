# File: policy_scout/locator.py
"""policy_scout.locator: finds the policy page linked from a site's landing page."""

from __future__ import annotations

import re
from typing import List, Optional, Protocol, Sequence

from policy_scout.config import ScoutConfig
from policy_scout.crawler.models import LinkCandidate, RenderedPage, WaitPolicy
from policy_scout.crawler.relevance import is_blocked
from policy_scout.crawler.renderer import Renderer, render_with_deadline
from policy_scout.errors import LocateFailure, RenderError
from policy_scout.logger import get_logger

__all__ = ("PolicyLocator", "PRIORITY_PATTERNS", "pick_policy_link")

logger = get_logger("locator")

PRIORITY_PATTERNS: Sequence[str] = (
    "/privacy-policy",
    "/privacy",
    "/legal/privacy",
    "/policies/privacy",
)
_PRIVACY_RE = re.compile(r"privacy", re.IGNORECASE)


class SearchFallback(Protocol):
    async def search(self, site_url: str) -> Optional[str]: ...


def pick_policy_link(
    links: Sequence[LinkCandidate],
    blocked_markers: Sequence[str] = (),
) -> Optional[LinkCandidate]:
    """
    Choose the policy link among a page's anchors.

    First pass: the earliest anchor (document order) whose href contains any
    of :data:`PRIORITY_PATTERNS`; which pattern matched does not matter.
    Second pass: the earliest anchor mentioning "privacy" in text or href.
    """
    candidates: List[LinkCandidate] = [
        LinkCandidate(text=link.text.strip().lower(), href=link.href)
        for link in links
        if link.href and not (blocked_markers and is_blocked(link.href, blocked_markers))
    ]
    for link in candidates:
        if any(pattern in link.href for pattern in PRIORITY_PATTERNS):
            return link
    for link in candidates:
        if _PRIVACY_RE.search(link.text) or _PRIVACY_RE.search(link.href):
            return link
    return None


class PolicyLocator:
    """Renders the root page once and picks its policy link, else asks the search fallback."""

    def __init__(
        self,
        config: ScoutConfig,
        renderer: Renderer,
        search: Optional[SearchFallback] = None,
    ) -> None:
        self.config = config
        self.renderer = renderer
        self.search = search

    async def locate(self, root_url: str) -> Optional[str]:
        try:
            page = await self._render_root(root_url)
        except LocateFailure as exc:
            logger.error("Error fetching the website %s: %s", root_url, exc.cause or exc)
            return None

        link = pick_policy_link(page.links, self.config.blocked_link_markers)
        if link is not None:
            logger.info("Privacy policy found: %s", link.href)
            return link.href

        if self.search is None:
            logger.info("No privacy policy found on %s and no search fallback configured", root_url)
            return None
        logger.info("No privacy policy found on %s, searching the web...", root_url)
        return await self.search.search(root_url)

    async def _render_root(self, root_url: str) -> RenderedPage:
        """
        Render the landing page; a too-short fast render is retried once with
        the slow wait policy. A failed fast render is not retried, and a failed
        slow retry keeps the fast render.
        """
        cfg = self.config
        try:
            page = await render_with_deadline(
                self.renderer, root_url, WaitPolicy.FAST, cfg.fast_timeout
            )
        except RenderError as exc:
            raise LocateFailure(root_url, exc) from exc

        if len(page.text.strip()) < cfg.min_content_chars:
            logger.debug("Landing page %s looks unrendered, waiting longer", root_url)
            try:
                page = await render_with_deadline(
                    self.renderer, root_url, WaitPolicy.SLOW, cfg.slow_timeout
                )
            except RenderError as exc:
                logger.warning("Slow load failed for %s, keeping the fast render: %s", root_url, exc)
        return page
