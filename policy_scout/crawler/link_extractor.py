# policy_scout/crawler/link_extractor.py
"""
Text and anchor extraction from raw HTML for PolicyScout.

Used by the plain HTTP renderer; the browser renderer reads the same data
straight from the live DOM.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from policy_scout.crawler.models import LinkCandidate, RenderedPage

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "tel:")
_INVISIBLE_TAGS = ["script", "style", "noscript", "template"]


def extract_links(soup: BeautifulSoup, page_url: str) -> List[LinkCandidate]:
    """
    Extract anchors as absolute HTTP(S) links, in document order.

    Ignores mailto:, javascript:, tel: and fragment-only links. Duplicates are
    kept: the crawler's visited set handles repeats.
    """
    links: List[LinkCandidate] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.startswith("#") or raw.lower().startswith(_SKIPPED_SCHEMES):
            continue
        absolute = urljoin(page_url, raw)
        if urlparse(absolute).scheme not in ("http", "https"):
            continue
        links.append(LinkCandidate(text=tag.get_text(" ", strip=True), href=absolute))
    return links


def extract_text(soup: BeautifulSoup) -> str:
    """Visible text, one line per text node (skips <script>, <style>, etc.)."""
    body = soup.body or soup
    for element in body(_INVISIBLE_TAGS):
        element.decompose()
    return "\n".join(body.stripped_strings)


def parse_page(url: str, html: str) -> RenderedPage:
    soup = BeautifulSoup(html, "html.parser")
    # links first: extract_text strips tags in place
    links = extract_links(soup, url)
    return RenderedPage(url=url, text=extract_text(soup), links=links)
