# File: policy_scout/crawler/relevance.py
"""policy_scout.crawler.relevance: decides which discovered links are worth following.

Off-host links and links to localized mirrors are never followed.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence
from urllib.parse import parse_qsl, urlparse

from policy_scout.crawler.models import LinkCandidate
from policy_scout.errors import ParseError
from policy_scout.logger import get_logger

__all__: Sequence[str] = (
    "EXCLUDED_LANGUAGES",
    "KEYWORDS",
    "hostname_of",
    "is_relevant",
    "is_blocked",
    "filter_links",
)

logger = get_logger("relevance")

EXCLUDED_LANGUAGES = frozenset({"ar", "de", "es", "fr", "it", "nl", "pl", "pt", "ru", "zh"})
KEYWORDS = ("privacy", "data", "gdpr", "cookie", "tracking")
_LANG_PARAMS = frozenset({"lang", "locale"})


def hostname_of(url: str) -> str:
    """Lower-cased hostname of *url*; raises ParseError when there is none."""
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError as exc:
        raise ParseError(url, str(exc)) from exc
    if not host:
        raise ParseError(url, "no hostname")
    return host


def _is_localized(url: str) -> bool:
    parsed = urlparse(url)
    segments = [s.lower() for s in parsed.path.split("/") if s]
    if any(s in EXCLUDED_LANGUAGES for s in segments):
        return True
    for key, value in parse_qsl(parsed.query, keep_blank_values=True):
        if key.lower() not in _LANG_PARAMS:
            continue
        # "es-ES" and "es_MX" carry the same primary language
        primary = value.lower().replace("_", "-").split("-", 1)[0]
        if primary in EXCLUDED_LANGUAGES:
            return True
    return False


def is_relevant(link_text: str, link_url: str, base_domain: str) -> bool:
    """Return True if the link should be followed from a page on *base_domain*."""
    try:
        host = hostname_of(link_url)
    except ParseError:
        return False
    if host != base_domain:
        return False
    if _is_localized(link_url):
        return False
    text = (link_text or "").lower()
    url = link_url.lower()
    return any(k in text or k in url for k in KEYWORDS)


def is_blocked(href: str, blocked_markers: Iterable[str]) -> bool:
    return any(marker in href for marker in blocked_markers)


def filter_links(
    links: Iterable[LinkCandidate],
    base_domain: str,
    blocked_markers: Sequence[str] = (),
) -> List[LinkCandidate]:
    """Relevant links in document order, minus those carrying a blocked marker."""
    relevant: List[LinkCandidate] = []
    for link in links:
        if not is_relevant(link.text, link.href, base_domain):
            continue
        if blocked_markers and is_blocked(link.href, blocked_markers):
            logger.debug("Skipping blocked link %s", link.href)
            continue
        relevant.append(link)
    return relevant
