# domain_scraper/extract/validators.py
"""
Blacklist gates for extracted candidates.

A raw match only becomes a candidate if it survives the gate for its entity
type. These tables reject the usual noise that leaks into page text:

  - CSS / JS / JSON fragments and asset URLs
  - hex, Base64 and tracking identifiers
  - version strings, timestamps, credit-card-shaped numbers
  - obviously synthetic test values (example.com, 1234567..., lorem ipsum)
  - structurally impossible lengths

Rejections are silent: callers drop the candidate, nothing is logged above
DEBUG and nothing is reported as an error.
"""

from __future__ import annotations

import re

from ..models import ParsedAddress
from .cleaning import phone_digits


def _compile(*patterns: str, flags: int = 0) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, flags) for p in patterns)


def _any_match(rules: tuple[re.Pattern[str], ...], value: str) -> bool:
    return any(rx.search(value) for rx in rules)


# ---------------------------------------------------------------------------
# Address content (street / full address text)
# ---------------------------------------------------------------------------

_ASSET_PATTERNS = _compile(
    r"\.(css|js|woff|woff2|ttf|eot|svg|png|jpg|jpeg|gif|webp)",
    r"/assets?/",
    r"typekit\.net",
    r"use\.typekit",
    r"fonts\.googleapis",
    r"cdnjs\.cloudflare",
    flags=re.IGNORECASE,
)

_CSS_JS_PATTERNS = _compile(
    r"format\s*\(\s*[\"']",
    r"url\s*\(\s*[\"']",
    r"@font-face",
    r"font-family\s*:",
    r"src\s*:",
    r"}\s*;?\s*$",
    r"\{\s*[^}]*\}",
    r"function\s*\(",
    r"var\s+\w+",
    r"const\s+\w+",
    r"let\s+\w+",
    r"return\s+",
    r"console\.",
    r"window\.",
    r"document\.",
    flags=re.IGNORECASE,
)

_MARKUP_PATTERNS = _compile(
    r"<[^>]+>",
    r"&[a-z]+;",
    r"xmlns",
    r"^\s*[\{\[]",
    r"\}\s*,?\s*$",
    r"\"[^\"]*\"\s*:\s*\"[^\"]*\"",
    flags=re.IGNORECASE,
)

_TRACKING_PATTERNS = _compile(
    r"gtag\(",
    r"analytics",
    r"tracking",
    r"pixel",
    flags=re.IGNORECASE,
)

_ID_PATTERNS = (
    re.compile(r"[a-f0-9]{20,}", re.IGNORECASE),
    re.compile(r"[A-Z0-9]{15,}"),
    re.compile(r"^[A-Za-z0-9+/=]{20,}$"),
)

_MISC_ADDRESS_PATTERNS = _compile(
    # error messages
    r"error",
    r"exception",
    r"undefined",
    r"null",
    # file paths
    r"^[A-Z]:\\",
    r"^/[a-z]",
    # version numbers
    r"v\d+\.\d+",
    r"version",
    r"lorem\s+ipsum",
    # suspicious numbers
    r"^\d{10,}$",
    r"^0{3,}",
    flags=re.IGNORECASE,
)

ADDRESS_CONTENT_BLACKLIST: tuple[re.Pattern[str], ...] = (
    _ASSET_PATTERNS
    + _CSS_JS_PATTERNS
    + _MARKUP_PATTERNS
    + _TRACKING_PATTERNS
    + _ID_PATTERNS
    + _MISC_ADDRESS_PATTERNS
)

# ---------------------------------------------------------------------------
# Phone
# ---------------------------------------------------------------------------

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

PHONE_BLACKLIST: tuple[re.Pattern[str], ...] = _compile(
    # long unformatted runs are IDs, not phones
    r"^\d{12,}$",
    r"^[0-9a-f]{10,}$",
    # tracking / test numbers
    r"^7768657\d+",
    r"^1234567\d+",
    r"^9999\d+",
    r"^0000\d+",
    # repetitive
    r"^(\d)\1{6,}$",
    r"^(12){4,}$",
    r"^(123){3,}$",
    # versions
    r"v\d+",
    r"version",
    # timestamps
    r"^1[0-9]{9,10}$",
    r"^20\d{8,}$",
    # hashes
    r"[a-f]{4,}",
    # sequential ids
    r"^123456\d+",
    r"^987654\d+",
    r"^[0-9]{13,}$",
    # card numbers
    r"^4\d{15}$",
    r"^5[1-5]\d{14}$",
    flags=re.IGNORECASE,
)

# ---------------------------------------------------------------------------
# Email
# ---------------------------------------------------------------------------

_EMAIL_SHAPE_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

EMAIL_BLACKLIST: tuple[re.Pattern[str], ...] = _compile(
    # example / test domains
    r"example\.com$",
    r"test\.com$",
    r"dummy\.com$",
    r"placeholder\.",
    r"sample\.",
    # suspicious characters
    r"[<>'\"{}()]",
    r"\s",
    # dev hosts
    r"localhost$",
    r"\.local$",
    r"\.test$",
    r"\.dev$",
    r"127\.0\.0\.1",
    # malformed URLs / code
    r"\.[a-z]{5,}$",
    r"^[a-f0-9]{8,}@",
    r"format\(",
    r"url\(",
    r"\.(css|js|woff2?|png|jpe?g|gif|svg|webp)$",
    # tracking
    r"analytics@",
    r"tracking@",
    r"pixel@",
    r"beacon@",
    # id-like local parts
    r"^[a-z0-9]{20,}@",
    # url-encoded
    r"%40",
    r"%2E",
    # file paths
    r"/.*@.*/",
    # lorem ipsum / obvious test inboxes
    r"lorem@",
    r"ipsum@",
    r"^test\d*@",
    r"^admin\d*@test",
    r"^user\d*@example",
    flags=re.IGNORECASE,
)

# ---------------------------------------------------------------------------
# Postal code / city
# ---------------------------------------------------------------------------

POSTAL_CODE_BLACKLIST: tuple[re.Pattern[str], ...] = _compile(
    r"^0{3,}",
    r"^1{3,}",
    r"^\d{2}0{3,}",
    r"[a-f]{4,}",
    r"^[A-Z0-9]{10,}$",
    flags=re.IGNORECASE,
)

CITY_BLACKLIST: tuple[re.Pattern[str], ...] = _compile(
    r"\d{5,}",
    r"^\d+$",
    r"[{}()\[\]]",
    r"[<>]",
    r"\.(css|js|html|php|asp)$",
    r"^[a-f0-9]{8,}$",
    flags=re.IGNORECASE,
)

# ---------------------------------------------------------------------------
# Social handles
# ---------------------------------------------------------------------------

SOCIAL_RESERVED_WORDS: frozenset[str] = frozenset(
    {
        # site navigation
        "home", "about", "contact", "privacy", "terms", "login", "register", "signup",
        "help", "support",
        "page", "pages", "profile", "user", "account", "settings", "dashboard", "admin",
        "share", "sharer", "follow", "like", "post", "feed", "timeline", "news",
        "www", "web", "site", "com", "org", "net", "app",
        # code / CSS
        "media", "font", "context", "type", "style", "css", "js", "html", "src", "href",
        "class", "id",
        # CSS at-rules and JSON-LD keywords that show up as "@word"
        "import", "charset", "keyframes", "supports", "namespace", "layer", "container",
        "property", "graph", "vocab", "language",
        # assets
        "assets", "images", "img", "pic", "photo", "logo", "icon", "banner",
        # CSS properties
        "width", "height", "color", "background", "margin", "padding", "border",
        # platform utility paths
        "plugins", "dialog", "intent", "hashtag", "explore", "watch", "embed", "channel",
        "company", "groups", "search", "tr",
    }
)

SOCIAL_HANDLE_BLACKLIST: tuple[re.Pattern[str], ...] = (
    re.compile(r"\.(jpg|jpeg|png|gif|svg|css|js|html|php|aspx?|pdf|doc|xls)$", re.IGNORECASE),
    re.compile(r"^\d+$"),
    re.compile(r"^.{1,2}$"),
    re.compile(r"^.{30,}$"),
    re.compile(r"[^\w.\-]"),
    re.compile(r"^[._-]|[._-]$"),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def is_valid_address_content(text: str | None) -> bool:
    """True unless the address text trips the code/CSS/tracking blacklist."""
    if not text:
        return True
    return not _any_match(ADDRESS_CONTENT_BLACKLIST, text)


def is_valid_postal_code(code: str | None) -> bool:
    if not code:
        return True
    return not _any_match(POSTAL_CODE_BLACKLIST, code)


def is_valid_city(city: str | None) -> bool:
    if not city:
        return True
    return not _any_match(CITY_BLACKLIST, city)


def is_valid_address(parsed: ParsedAddress) -> bool:
    """A parsed address needs a street plus a city or postal code, all clean."""
    if not parsed.street or (not parsed.city and not parsed.postal_code):
        return False
    return (
        is_valid_address_content(parsed.street)
        and is_valid_postal_code(parsed.postal_code)
        and is_valid_city(parsed.city)
    )


def is_valid_phone(phone: str | None) -> bool:
    if not phone:
        return False
    digits = phone_digits(phone)
    if len(digits) < PHONE_MIN_DIGITS or len(digits) > PHONE_MAX_DIGITS:
        return False
    return not _any_match(PHONE_BLACKLIST, phone)


def is_valid_email(email: str | None) -> bool:
    if not email or not _EMAIL_SHAPE_RE.match(email):
        return False
    return not _any_match(EMAIL_BLACKLIST, email)


def is_valid_social_handle(username: str | None, platform: str | None = None) -> bool:
    """
    Reject reserved path words, asset names and malformed handles.

    `platform` is accepted for symmetry with the extractor; the rules are
    currently the same for every platform.
    """
    if not username:
        return False
    if username.lower() in SOCIAL_RESERVED_WORDS:
        return False
    return not _any_match(SOCIAL_HANDLE_BLACKLIST, username)


__all__ = [
    "ADDRESS_CONTENT_BLACKLIST",
    "PHONE_BLACKLIST",
    "EMAIL_BLACKLIST",
    "POSTAL_CODE_BLACKLIST",
    "CITY_BLACKLIST",
    "SOCIAL_RESERVED_WORDS",
    "SOCIAL_HANDLE_BLACKLIST",
    "PHONE_MIN_DIGITS",
    "PHONE_MAX_DIGITS",
    "is_valid_address_content",
    "is_valid_postal_code",
    "is_valid_city",
    "is_valid_address",
    "is_valid_phone",
    "is_valid_email",
    "is_valid_social_handle",
]
