# File: policy_scout/engine.py
"""policy_scout.engine: orchestration layer – cache, locate, crawl, summarize, persist."""

from __future__ import annotations

from contextlib import AsyncExitStack
from typing import Iterable, List, Optional, Protocol

from policy_scout.aggregator import (
    SOURCE_CACHED,
    SOURCE_EMPTY,
    SOURCE_ERROR,
    SOURCE_NEW,
    SOURCE_NOT_FOUND,
    PolicyReport,
)
from policy_scout.config import ScoutConfig
from policy_scout.crawler.crawler import PolicyCrawler
from policy_scout.crawler.renderer import Renderer, create_renderer
from policy_scout.locator import PolicyLocator, SearchFallback
from policy_scout.logger import logger
from policy_scout.search import BraveSearch
from policy_scout.storage import FilePolicyStore, PolicyStore, cache_key
from policy_scout.utils import clean_text, validate_site_url

__all__ = ["Engine", "Summarizer", "analyze_site", "refresh_sites"]


class Summarizer(Protocol):
    async def summarize(self, text: str) -> str: ...


class Engine:
    """Фасад для CLI, HTTP-сервера и тестов.

    Collaborators not passed in are built from *config*. A renderer built here
    is started in ``__aenter__`` and shut down in ``__aexit__``; an injected
    one is managed by its owner.
    """

    def __init__(
        self,
        config: ScoutConfig,
        *,
        renderer: Optional[Renderer] = None,
        search: Optional[SearchFallback] = None,
        store: Optional[PolicyStore] = None,
        summarizer: Optional[Summarizer] = None,
    ) -> None:
        self.config = config
        self._owns_renderer = renderer is None
        self.renderer = renderer if renderer is not None else create_renderer(config)
        self.search = search if search is not None else BraveSearch(config)
        self.store = store if store is not None else FilePolicyStore(config.cache_dir)
        self.summarizer = summarizer
        self.locator = PolicyLocator(config, self.renderer, self.search)
        self.crawler = PolicyCrawler(config, self.renderer)
        self._stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> Engine:
        self._stack = AsyncExitStack()
        if self._owns_renderer:
            await self._stack.enter_async_context(self.renderer)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._stack is not None:
            await self._stack.aclose()
            self._stack = None

    async def analyze(self, site_url: str, *, use_cache: bool = True) -> PolicyReport:
        """
        Locate and assemble the policy of *site_url*.

        Raises ValueError for a URL that does not start with ``http``. Not
        finding a policy is a normal outcome (``source="not_found"``).
        """
        site_url = validate_site_url(site_url)
        key = cache_key(site_url)

        if use_cache:
            cached = self.store.get_cached(key)
            if cached:
                logger.info("Cache hit for %s (%s)", site_url, key)
                return PolicyReport(site_url=site_url, source=SOURCE_CACHED, summary=cached)

        policy_url = await self.locator.locate(site_url)
        if not policy_url:
            logger.info("No privacy policy URL found for %s", site_url)
            return PolicyReport(site_url=site_url, source=SOURCE_NOT_FOUND)

        result = await self.crawler.run(policy_url)
        text = clean_text(result.text)
        if not text:
            logger.warning("Policy at %s contained no extractable text", policy_url)
            return PolicyReport(
                site_url=site_url,
                source=SOURCE_EMPTY,
                policy_url=policy_url,
                pages_visited=result.pages_visited,
            )

        summary = await self._summarize(text)
        self._persist(key, summary)
        return PolicyReport(
            site_url=site_url,
            source=SOURCE_NEW,
            policy_url=policy_url,
            summary=summary,
            text_length=len(text),
            pages_visited=result.pages_visited,
        )

    async def refresh(self, sites: Iterable[str]) -> List[PolicyReport]:
        """Re-analyze every site, bypassing the cache; one failing site does not stop the rest."""
        reports: List[PolicyReport] = []
        for site in sites:
            logger.info("Refreshing %s", site)
            try:
                reports.append(await self.analyze(site, use_cache=False))
            except Exception as exc:
                logger.error("Failed to refresh %s: %s", site, exc)
                reports.append(PolicyReport(site_url=site, source=SOURCE_ERROR, error=str(exc)))
        return reports

    def _persist(self, key: str, content: str) -> None:
        try:
            self.store.put(key, content)
        except Exception as exc:
            logger.error("Error saving policy %s, report kept: %s", key, exc)

    async def _summarize(self, text: str) -> str:
        if self.summarizer is None:
            return text
        try:
            return await self.summarizer.summarize(text)
        except Exception as exc:
            logger.error("Summarizer failed, storing raw text: %s", exc)
            return text


async def analyze_site(cfg: ScoutConfig, url: str, *, use_cache: bool = True) -> PolicyReport:
    """Запускает Engine в контексте и анализирует один сайт."""
    async with Engine(cfg) as engine:
        return await engine.analyze(url, use_cache=use_cache)


async def refresh_sites(cfg: ScoutConfig, sites: Iterable[str]) -> List[PolicyReport]:
    async with Engine(cfg) as engine:
        return await engine.refresh(sites)
