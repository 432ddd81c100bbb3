"""
Regex rule tables and a stateless matcher.

Each entity type owns an ordered tuple of `PatternRule`s. A rule's value is
its first capture group when that group participated in the match, else the
whole match. `find_matches` wraps `re.finditer`, so every scan starts from a
fresh position and no match state survives between calls.
"""

# domain_scraper/extract/patterns.py
from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple

from bs4 import BeautifulSoup

ADDRESS_CONTEXT_WINDOW = 200
PHONE_CONTEXT_WINDOW = 100
EMAIL_CONTEXT_WINDOW = 100


@dataclass(frozen=True)
class PatternRule:
    tag: str
    pattern: re.Pattern[str]


class PatternMatch(NamedTuple):
    value: str
    start: int
    end: int
    context: str


def _rule(tag: str, pattern: str, flags: int = re.IGNORECASE) -> PatternRule:
    return PatternRule(tag, re.compile(pattern, flags))


def find_matches(rule: PatternRule, text: str, window: int = 0) -> Iterator[PatternMatch]:
    """Yield every non-empty match of `rule` in `text` with a ±window context slice."""
    if not text:
        return
    for m in rule.pattern.finditer(text):
        value = m.group(1) if m.re.groups and m.group(1) is not None else m.group(0)
        if not value:
            continue
        start, end = m.start(), m.end()
        context = text[max(0, start - window) : end + window] if window else ""
        yield PatternMatch(value, start, end, context)


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------

_UK_STREET_TYPES = (
    r"(?:Street|St|Road|Rd|Avenue|Ave|Lane|Square|Sq|Place|Pl|Close|Crescent|Gardens|"
    r"Court|Ct|Drive|Dr|Way|Walk|Row|Mews|Terrace|Grove|Hill|Park|Green|Common)"
)
_UK_POSTCODE = r"[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}"
# Bounded spans: minified pages arrive as one long line
_UK_HOUSE_NO = r"\d{1,5}(?:-\d{1,5})?"

_FR_STREET_TYPES = r"(?i:rue|avenue|av\.|boulevard|bd|place|quai|impasse|allée|chemin)"
_FR_CITY = r"[A-ZÀ-Ý][a-zà-ÿ'\-]+(?:[ \-][A-ZÀ-Ý][a-zà-ÿ'\-]+){0,2}"

ADDRESS_RULES: tuple[PatternRule, ...] = (
    _rule(
        "es_labelled",
        r"(?:Dirección|Dirección:|Dir\.|Ubicación|Ubicado en|Nos encontramos en):?\s*"
        r"([^<>\n]{10,200}(?:calle|avenida|plaza|paseo|carrera|km|kilómetro|\d{5})[^<>\n]{0,100})",
    ),
    _rule(
        "es_street",
        r"(?:C/|Calle|Av\.|Avenida|Plaza|Pza\.|Paseo|Carrera|Cr\.|Km\.?)\s*"
        r"([^<>\n]{5,150}(?:\d{5}|\d{2}\.\d{3})[^<>\n]{0,50})",
    ),
    _rule(
        "en_labelled",
        r"(?:Address|Location|Located at|Our office|Visit us|Head Office|Office):?\s*"
        r"([^<>\n]{10,200}(?:street|avenue|road|drive|lane|way|\d{5})[^<>\n]{0,100})",
    ),
    _rule(
        "en_numbered_street",
        r"(?:\d+\s+[^<>\n,]{3,50}(?:street|avenue|road|drive|lane|way|st\.|ave\.|rd\.|dr\.)"
        r"[^<>\n]{0,100})",
    ),
    _rule(
        "uk_labelled",
        rf"(?:Address|Head Office|Office|Location):?\s*"
        rf"([^<>\n]{{0,60}}?{_UK_HOUSE_NO}\s+[A-Za-z\s]{{1,60}}{_UK_STREET_TYPES}"
        rf"[^<>\n]{{0,100}}{_UK_POSTCODE}[^<>\n]{{0,50}})",
    ),
    _rule(
        "uk_numbered_street",
        rf"\b({_UK_HOUSE_NO}\s+[A-Za-z\s]{{1,60}}{_UK_STREET_TYPES}[^<>\n]{{0,100}}{_UK_POSTCODE})\b",
    ),
    _rule(
        "fr_labelled",
        r"(?:Adresse|Adresse:|Situé à|Nous sommes situés|Visitez-nous):?\s*"
        r"([^<>\n]{10,200}(?:rue|avenue|boulevard|place|\d{5})[^<>\n]{0,100})",
    ),
    # "228 rue de Rivoli, 75001 Paris" with no label in front
    _rule(
        "fr_numbered_street",
        rf"\b(\d{{1,4}}(?:\s?bis|\s?ter)?,?\s+{_FR_STREET_TYPES}\s+[^<>\n,]{{2,60}},?\s*"
        rf"\d{{5}}\s+{_FR_CITY})",
        flags=0,
    ),
)

MIN_ADDRESS_MATCH_LEN = 10

# ---------------------------------------------------------------------------
# Phones / emails
# ---------------------------------------------------------------------------

PHONE_RULES: tuple[PatternRule, ...] = (
    _rule("labelled", r"(?:Tel|Teléfono|Telefono|Phone|Tél):?\s*([+]?[\d\s\-().]{7,20})"),
    _rule("unlabelled", r"([+]?[\d\s\-().]{10,20})", flags=0),
)

EMAIL_RULES: tuple[PatternRule, ...] = (
    _rule("address", r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"),
)

# ---------------------------------------------------------------------------
# Social
# ---------------------------------------------------------------------------

SOCIAL_RULES: dict[str, tuple[PatternRule, ...]] = {
    "instagram": (
        _rule("instagram_url", r"instagram\.com/([a-zA-Z0-9_.]+)"),
        # bare "@handle", but not the "@" inside an email address
        _rule("instagram_at", r"(?<![\w.%+-])@([a-zA-Z0-9_.]+)"),
        _rule("instagram_ig", r"ig:\s*@?([a-zA-Z0-9_.]+)"),
    ),
    "facebook": (
        _rule("facebook_url", r"facebook\.com/([a-zA-Z0-9_.]+)"),
        _rule("facebook_short", r"(?<![\w.-])fb\.com/([a-zA-Z0-9_.]+)"),
    ),
    "twitter": (
        _rule("twitter_url", r"twitter\.com/([a-zA-Z0-9_]+)"),
        _rule("x_url", r"(?<![\w.-])x\.com/([a-zA-Z0-9_]+)"),
        _rule("twitter_at", r"@([a-zA-Z0-9_]+)\s*(?:twitter|tw)"),
    ),
    "linkedin": (_rule("linkedin_url", r"linkedin\.com/(?:company|in)/([a-zA-Z0-9-]+)"),),
    "youtube": (
        _rule("youtube_url", r"youtube\.com/(?:channel|user|c)/([a-zA-Z0-9_-]+)"),
        _rule("youtube_short", r"youtu\.be/([a-zA-Z0-9_-]+)"),
    ),
    "tiktok": (_rule("tiktok_url", r"tiktok\.com/@([a-zA-Z0-9_.]+)"),),
}

SOCIAL_BASE_URLS: dict[str, str] = {
    "instagram": "https://instagram.com/",
    "facebook": "https://facebook.com/",
    "twitter": "https://twitter.com/",
    "linkedin": "https://linkedin.com/company/",
    "youtube": "https://youtube.com/channel/",
    "tiktok": "https://tiktok.com/@",
}

# Host fragments that mark an <a href> as a social profile link
SOCIAL_LINK_HOSTS: tuple[str, ...] = (
    "instagram.com",
    "facebook.com",
    "fb.com",
    "twitter.com",
    "x.com",
    "linkedin.com",
    "youtube.com",
    "youtu.be",
    "tiktok.com",
)

# ---------------------------------------------------------------------------
# DOM regions
# ---------------------------------------------------------------------------

CONTEXTUAL_SELECTORS: tuple[str, ...] = (
    "address", ".address", ".location", ".contact", ".info",
    '[itemtype*="PostalAddress"]', ".venue", ".hotel-info", ".restaurant-info",
    ".contact-info", ".contact-details", ".contact-section", ".office-info",
    ".company-info", ".head-office", ".location-details", ".address-info",
    "footer", ".footer", ".footer-content", ".site-footer",
    ".contact-wrapper", ".office-address", ".business-info", ".location-info",
    ".privacy", ".privacy-policy", ".unsubscribe", ".newsletter", ".email-preferences",
    ".marketing", ".careers", ".jobs", ".legal", ".terms",
)  # fmt: skip

SOCIAL_SELECTORS: tuple[str, ...] = (
    ".social-info", ".social-media", ".social-links", ".social", ".socials",
    ".social-icons", ".follow-us", ".social-footer", ".social-nav",
    '[class*="social"]', '[class*="follow"]', "footer", ".footer",
)  # fmt: skip

COMPONENT_SELECTORS: tuple[str, ...] = (
    ".contact-info", ".contact-details", ".office-info", ".head-office",
    ".company-info", ".location-details", ".address-info", "footer", ".footer",
)  # fmt: skip

# ---------------------------------------------------------------------------
# Page text
# ---------------------------------------------------------------------------

_NON_CONTENT_TAGS = ("script", "style", "noscript", "template")
_HSPACE_RE = re.compile(r"[ \t\r\f\v\xa0]+")
_LINE_BREAKS_RE = re.compile(r"\s*\n\s*")


def normalize_text(text: str) -> str:
    """Collapse horizontal whitespace but keep line breaks as boundaries."""
    text = _HSPACE_RE.sub(" ", text or "")
    return _LINE_BREAKS_RE.sub("\n", text).strip()


def page_text(soup: BeautifulSoup) -> str:
    """
    Visible text of a parsed document.

    Mutates `soup`: script/style/noscript/template nodes are removed.
    """
    for tag in soup.find_all(_NON_CONTENT_TAGS):
        tag.decompose()
    return normalize_text(soup.get_text(" "))


__all__ = [
    "ADDRESS_CONTEXT_WINDOW",
    "PHONE_CONTEXT_WINDOW",
    "EMAIL_CONTEXT_WINDOW",
    "PatternRule",
    "PatternMatch",
    "find_matches",
    "ADDRESS_RULES",
    "MIN_ADDRESS_MATCH_LEN",
    "PHONE_RULES",
    "EMAIL_RULES",
    "SOCIAL_RULES",
    "SOCIAL_BASE_URLS",
    "SOCIAL_LINK_HOSTS",
    "CONTEXTUAL_SELECTORS",
    "SOCIAL_SELECTORS",
    "COMPONENT_SELECTORS",
    "normalize_text",
    "page_text",
]
