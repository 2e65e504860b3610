"""policy_scout.crawler: relevance filter, renderers and the budgeted crawler."""

from policy_scout.crawler.crawler import PAGE_SEPARATOR, PolicyCrawler
from policy_scout.crawler.models import (
    CrawlBudget,
    CrawlResult,
    LinkCandidate,
    RenderedPage,
    WaitPolicy,
)
from policy_scout.crawler.relevance import filter_links, is_relevant
from policy_scout.crawler.renderer import Renderer, create_renderer

__all__ = [
    "PAGE_SEPARATOR",
    "PolicyCrawler",
    "CrawlBudget",
    "CrawlResult",
    "LinkCandidate",
    "RenderedPage",
    "WaitPolicy",
    "filter_links",
    "is_relevant",
    "Renderer",
    "create_renderer",
]
