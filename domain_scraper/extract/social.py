# domain_scraper/extract/social.py
from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from ..dedupe import dedupe_social
from ..models import SocialHandle
from .patterns import (
    SOCIAL_BASE_URLS,
    SOCIAL_LINK_HOSTS,
    SOCIAL_RULES,
    SOCIAL_SELECTORS,
    find_matches,
)
from .validators import is_valid_social_handle

log = logging.getLogger(__name__)


def build_social_url(platform: str, username: str) -> str:
    """Canonical profile URL: platform base URL + handle."""
    return SOCIAL_BASE_URLS[platform] + username


def handles_in(content: str) -> list[SocialHandle]:
    """Every valid handle in `content`, per platform in rule order."""
    found: list[SocialHandle] = []
    for platform, rules in SOCIAL_RULES.items():
        for rule in rules:
            for m in find_matches(rule, content):
                username = m.value
                if not is_valid_social_handle(username, platform):
                    log.debug("social handle rejected", extra={"platform": platform, "handle": username})
                    continue
                found.append(SocialHandle(platform, username, build_social_url(platform, username)))
    return found


def _link_content(a) -> str:
    return f"{a.get('href') or ''} {a.get_text(' ')}"


def extract_social(soup: BeautifulSoup, raw_html: str) -> list[SocialHandle]:
    """
    Social handles of one page, in discovery order.

    Search order: social/footer regions (their links first, then their own
    markup and text), then any anchor pointing at a social host anywhere in
    the document, then the raw HTML. First sighting of a (platform, username)
    pair wins.
    """
    candidates: list[SocialHandle] = []

    for selector in SOCIAL_SELECTORS:
        for element in soup.select(selector):
            for a in element.find_all("a"):
                candidates.extend(handles_in(_link_content(a)))
            candidates.extend(handles_in(f"{element.decode_contents()} {element.get_text(' ')}"))

    for a in soup.find_all("a", href=True):
        href = a["href"].lower()
        if any(host in href for host in SOCIAL_LINK_HOSTS):
            candidates.extend(handles_in(_link_content(a)))

    candidates.extend(handles_in(raw_html or ""))
    return dedupe_social(candidates)


__all__ = ["build_social_url", "handles_in", "extract_social"]
