# policy_scout/crawler/crawler.py
"""
Budgeted depth-first crawler that assembles a policy document's full text.

Starting from the policy page, every relevant same-host link is followed in
document order until the page budget runs out. Page texts are concatenated in
pre-order, separated by a blank line.
"""
from __future__ import annotations

import time
from typing import Optional, Set

from policy_scout.config import ScoutConfig
from policy_scout.crawler.models import CrawlBudget, CrawlResult, RenderedPage, WaitPolicy
from policy_scout.crawler.relevance import filter_links, hostname_of
from policy_scout.crawler.renderer import Renderer, render_with_deadline
from policy_scout.errors import ParseError, RenderError
from policy_scout.logger import get_logger

__all__ = ("PolicyCrawler", "PAGE_SEPARATOR")

PAGE_SEPARATOR = "\n\n"


class PolicyCrawler:
    """Sequential crawler; at most one page is being rendered at any time."""

    def __init__(self, config: ScoutConfig, renderer: Renderer) -> None:
        self.config = config
        self.renderer = renderer
        self.logger = get_logger("crawler")

    async def run(self, url: str) -> CrawlResult:
        """Crawl from *url* with fresh per-invocation state."""
        start = time.monotonic()
        budget = CrawlBudget(max_pages=self.config.max_pages)
        visited: Set[str] = set()
        seen: Optional[Set[str]] = set() if self.config.dedup_content else None
        text = await self.crawl(url, visited, budget, seen)
        self.logger.info(
            "Crawl of %s finished: %d page(s), %d chars in %.2f s",
            url, budget.pages_visited, len(text), time.monotonic() - start,
        )
        return CrawlResult(url=url, text=text, pages_visited=budget.pages_visited)

    async def crawl(
        self,
        url: str,
        visited: Set[str],
        budget: CrawlBudget,
        seen: Optional[Set[str]] = None,
    ) -> str:
        """
        Return the text of *url* followed by the text of its relevant subtree.

        ``visited`` and ``budget`` are shared by the whole traversal; ``seen``
        enables content deduplication when given. Page failures contribute an
        empty string; only cancellation propagates.
        """
        if budget.exhausted or url in visited:
            return ""

        visited.add(url)
        count = budget.consume()
        self.logger.info("Crawling (#%d): %s", count, url)

        try:
            page = await self._fetch(url)
        except RenderError as exc:
            self.logger.error("Error extracting text from %s: %s", url, exc.reason or exc)
            return ""

        text = page.text
        if seen is not None:
            if text in seen:
                self.logger.info("Duplicate content at %s, dropped", url)
                text = ""
            else:
                seen.add(text)

        try:
            base_domain = hostname_of(url)
        except ParseError:
            return text

        children = filter_links(page.links, base_domain, self.config.blocked_link_markers)
        self.logger.debug("%d relevant link(s) on %s", len(children), url)
        for link in children:
            if budget.exhausted:
                break
            sub_text = await self.crawl(link.href, visited, budget, seen)
            text += PAGE_SEPARATOR + sub_text
        return text

    async def _fetch(self, url: str) -> RenderedPage:
        """
        Fast render first; retry once with the slow wait policy if it fails or is too short.

        A failed slow retry falls back to the short fast render when there is
        one; RenderError is raised only when neither tier produced a page.
        """
        page: Optional[RenderedPage] = None
        try:
            page = await render_with_deadline(
                self.renderer, url, WaitPolicy.FAST, self.config.fast_timeout
            )
        except RenderError as exc:
            self.logger.warning("Initial fast load failed for %s: %s", url, exc.reason or exc)

        if page is not None and len(page.text.strip()) >= self.config.min_content_chars:
            return page

        self.logger.info("Retrying %s with %s...", url, self.config.slow_wait)
        try:
            return await render_with_deadline(
                self.renderer, url, WaitPolicy.SLOW, self.config.slow_timeout
            )
        except RenderError as exc:
            if page is None:
                raise
            self.logger.warning(
                "Slow load failed for %s, keeping the fast render: %s", url, exc.reason or exc
            )
            return page
