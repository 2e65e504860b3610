# File: tests/test_locator.py
from __future__ import annotations

from typing import List, Optional

import pytest

from conftest import FakeRenderer, page
from policy_scout.crawler.models import LinkCandidate, WaitPolicy
from policy_scout.errors import RenderError
from policy_scout.locator import PolicyLocator, pick_policy_link

SITE = "https://example.com"


class StubSearch:
    def __init__(self, result: Optional[str] = None) -> None:
        self.result = result
        self.queries: List[str] = []

    async def search(self, site_url: str) -> Optional[str]:
        self.queries.append(site_url)
        return self.result


def make_locator(config, links, search=None, text="Welcome " * 40):
    renderer = FakeRenderer({SITE: page(SITE, text=text, links=links)})
    return PolicyLocator(config, renderer, search), renderer


@pytest.mark.asyncio()
async def test_first_pattern_match_in_document_order_wins(basic_config):
    locator, _ = make_locator(
        basic_config,
        [
            ("About", f"{SITE}/about"),
            ("Legal", f"{SITE}/legal/privacy"),
            ("Privacy Policy", f"{SITE}/privacy-policy"),
        ],
    )

    assert await locator.locate(SITE) == f"{SITE}/legal/privacy"


@pytest.mark.asyncio()
async def test_pattern_match_beats_earlier_text_match(basic_config):
    locator, _ = make_locator(
        basic_config,
        [
            ("Your Privacy Choices", f"{SITE}/choices"),
            ("Policies", f"{SITE}/policies/privacy"),
        ],
    )

    assert await locator.locate(SITE) == f"{SITE}/policies/privacy"


@pytest.mark.asyncio()
async def test_falls_back_to_privacy_text(basic_config):
    search = StubSearch("https://search.example/privacy")
    locator, _ = make_locator(
        basic_config,
        [("Home", f"{SITE}/"), ("PRIVACY notice", f"{SITE}/notice")],
        search,
    )

    assert await locator.locate(SITE) == f"{SITE}/notice"
    assert search.queries == []


@pytest.mark.asyncio()
async def test_uses_search_when_no_anchor_matches(basic_config):
    search = StubSearch("https://example.com/legal/policy")
    locator, _ = make_locator(basic_config, [("Home", f"{SITE}/")], search)

    assert await locator.locate(SITE) == "https://example.com/legal/policy"
    assert search.queries == [SITE]


@pytest.mark.asyncio()
async def test_none_when_no_anchor_and_search_fails(basic_config):
    search = StubSearch(None)
    locator, _ = make_locator(basic_config, [("Home", f"{SITE}/")], search)

    assert await locator.locate(SITE) is None


@pytest.mark.asyncio()
async def test_none_when_no_anchor_and_no_search(basic_config):
    locator, _ = make_locator(basic_config, [])

    assert await locator.locate(SITE) is None


@pytest.mark.asyncio()
async def test_render_failure_returns_none_without_search_or_retry(basic_config):
    search = StubSearch("https://example.com/privacy")
    renderer = FakeRenderer({SITE: RenderError(SITE, "net::ERR_NAME_NOT_RESOLVED")})
    locator = PolicyLocator(basic_config, renderer, search)

    assert await locator.locate(SITE) is None
    assert search.queries == []
    assert renderer.calls == [(SITE, WaitPolicy.FAST)]


@pytest.mark.asyncio()
async def test_blank_landing_page_is_rendered_again_slowly(basic_config):
    renderer = FakeRenderer(
        {
            SITE: {
                WaitPolicy.FAST: page(SITE, text=""),
                WaitPolicy.SLOW: page(SITE, links=[("Privacy", f"{SITE}/privacy")]),
            }
        }
    )
    locator = PolicyLocator(basic_config, renderer)

    assert await locator.locate(SITE) == f"{SITE}/privacy"
    assert renderer.calls == [(SITE, WaitPolicy.FAST), (SITE, WaitPolicy.SLOW)]


@pytest.mark.asyncio()
async def test_short_landing_page_with_nav_links_is_rendered_again_slowly(basic_config):
    search = StubSearch("https://search.example/privacy")
    renderer = FakeRenderer(
        {
            SITE: {
                WaitPolicy.FAST: page(SITE, text="Loading", links=[("Home", f"{SITE}/")]),
                WaitPolicy.SLOW: page(
                    SITE,
                    links=[("Home", f"{SITE}/"), ("Privacy Policy", f"{SITE}/privacy-policy")],
                ),
            }
        }
    )
    locator = PolicyLocator(basic_config, renderer, search)

    assert await locator.locate(SITE) == f"{SITE}/privacy-policy"
    assert renderer.calls == [(SITE, WaitPolicy.FAST), (SITE, WaitPolicy.SLOW)]
    assert search.queries == []


@pytest.mark.asyncio()
async def test_failed_slow_retry_keeps_fast_landing_page(basic_config):
    renderer = FakeRenderer(
        {
            SITE: {
                WaitPolicy.FAST: page(SITE, text="Loading", links=[("Privacy", f"{SITE}/privacy")]),
                WaitPolicy.SLOW: RenderError(SITE, "Timeout 30000ms exceeded"),
            }
        }
    )
    locator = PolicyLocator(basic_config, renderer)

    assert await locator.locate(SITE) == f"{SITE}/privacy"


def test_pick_policy_link_skips_blocked_markers():
    links = [
        LinkCandidate("Privacy", f"{SITE}/privacy?privacy_mutation_token=1"),
        LinkCandidate("Privacy Policy", f"{SITE}/privacy-policy"),
    ]
    assert pick_policy_link(links).href == f"{SITE}/privacy?privacy_mutation_token=1"
    chosen = pick_policy_link(links, blocked_markers=["privacy_mutation_token"])
    assert chosen.href == f"{SITE}/privacy-policy"


def test_pick_policy_link_lowercases_text():
    chosen = pick_policy_link([LinkCandidate("  Privacy Center ", f"{SITE}/pc")])
    assert chosen.text == "privacy center"


def test_pick_policy_link_none():
    assert pick_policy_link([LinkCandidate("Terms", f"{SITE}/terms")]) is None
