"""
Data models for the PolicyScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class WaitPolicy(str, Enum):
    """How long a render waits before the page counts as ready."""

    FAST = "fast"
    SLOW = "slow"


@dataclass(frozen=True, slots=True)
class LinkCandidate:
    """Anchor found on a rendered page: visible text and absolute href."""

    text: str
    href: str


@dataclass(slots=True)
class RenderedPage:
    """Text and anchors (in document order) of one rendered page."""

    url: str
    text: str
    links: List[LinkCandidate] = field(default_factory=list)


@dataclass(slots=True)
class CrawlBudget:
    """Page budget shared by reference across one whole traversal."""

    max_pages: int
    pages_visited: int = 0

    @property
    def exhausted(self) -> bool:
        return self.pages_visited >= self.max_pages

    def consume(self) -> int:
        if self.exhausted:
            raise RuntimeError("crawl budget exhausted")
        self.pages_visited += 1
        return self.pages_visited


@dataclass(slots=True)
class CrawlResult:
    """Aggregated text of one top-level crawl."""

    url: str
    text: str
    pages_visited: int

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
