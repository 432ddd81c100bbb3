"""
Domain relevance scoring.

Answers "how likely is this candidate to belong to *this* domain" using the
domain's base name, the candidate text and the context window captured
around the match. Keyword bonuses and penalties come from the tables in
`scoring.rules`; the structural bonuses (domain-name mentions, street
shapes, postal-prefix locale hints) live here.

All scorers return a `ScoreResult` clamped to [0, 100].
"""

# domain_scraper/scoring/relevance.py
from __future__ import annotations

import re
from functools import lru_cache

import tldextract

from ..extract.cleaning import phone_digits
from ..models import ScoreResult, clamp_score
from .rules import (
    ADDRESS_RULES,
    ADDRESS_STREET_WORDS,
    EMAIL_RULES,
    FREE_EMAIL_DOMAINS,
    FREE_EMAIL_PENALTY,
    PHONE_RULES,
    POSTAL_PREFIX_CITIES,
    apply_keyword_rules,
)

# Offline snapshot only: never fetch the public suffix list at runtime
_TLD_EXTRACT = tldextract.TLDExtract(cache_dir=False, suffix_list_urls=())

# Leading words stripped to form a shorter name variant ("lemeurice" -> "meurice")
NAME_PREFIXES: tuple[str, ...] = ("hotel", "the", "les", "los", "las", "le", "la", "el")
MIN_VARIANT_LEN = 4
MIN_EMAIL_LABEL_LEN = 4

_COMPACT_RE = re.compile(r"[\s\-.'’]+")
_FIVE_DIGITS_RE = re.compile(r"\d{5}")
_NUMBERED_STREET_RE = re.compile(r"\d+\s+(?:rue|avenue|boulevard|street|calle|avenida)", re.IGNORECASE)
_POSTAL_PREFIX_RE = re.compile(r"\b(\d{2})\d{3}\b")


# ---------------------------------------------------------------------------
# Domain name helpers
# ---------------------------------------------------------------------------


@lru_cache(maxsize=256)
def domain_base_name(domain: str) -> str:
    """
    Registrable label of a domain, lower-cased.

    >>> domain_base_name("https://www.lemeurice.com")
    'lemeurice'
    >>> domain_base_name("shop.example.co.uk")
    'example'
    """
    d = (domain or "").strip().lower()
    ext = _TLD_EXTRACT(d)
    if ext.domain:
        return ext.domain
    # No recognised suffix (e.g. "localhost"): first host label
    host = re.sub(r"^https?://", "", d).split("/")[0]
    host = re.sub(r"^www\.", "", host)
    return host.split(".")[0]


def domain_name_variants(name: str) -> tuple[str, ...]:
    """The name itself plus the name with a leading article/prefix removed."""
    name = (name or "").lower()
    if not name:
        return ()
    variants = [name]
    for prefix in NAME_PREFIXES:
        if name.startswith(prefix):
            rest = name[len(prefix):].lstrip("-")
            if len(rest) >= MIN_VARIANT_LEN and rest not in variants:
                variants.append(rest)
    return tuple(variants)


def _compact(text: str) -> str:
    return _COMPACT_RE.sub("", text.lower())


@lru_cache(maxsize=256)
def _variant_patterns(name: str) -> tuple[re.Pattern[str], ...]:
    # Stripped variants only count as whole words ("even" must not hit "seventh")
    return tuple(
        re.compile(rf"\b{re.escape(v)}\b") for v in domain_name_variants(name)[1:]
    )


def mentions_domain(text: str | None, domain_name: str) -> bool:
    """
    True when the full name occurs in `text` (raw or compacted), or a
    prefix-stripped variant occurs there as a whole word.
    """
    if not text or not domain_name:
        return False
    name = domain_name.lower()
    low = text.lower()
    if name in low or name in _compact(text):
        return True
    return any(rx.search(low) for rx in _variant_patterns(name))


# ---------------------------------------------------------------------------
# Scorers
# ---------------------------------------------------------------------------


class _Tally:
    __slots__ = ("score", "reasons")

    def __init__(self, base: float = 0) -> None:
        self.score = base
        self.reasons: list[str] = []

    def add(self, tag: str, delta: float) -> None:
        self.score += delta
        sign = "+" if delta >= 0 else ""
        self.reasons.append(f"{tag}{sign}{delta:g}")

    def extend(self, delta: int, reasons: list[str]) -> None:
        self.score += delta
        self.reasons.extend(reasons)

    def result(self) -> ScoreResult:
        return ScoreResult(score=clamp_score(self.score), reasons=self.reasons)


_NAMED_TAIL = r".*\d+.*(?:rue|street|avenue|boulevard).*\d{5}"


def _has_complete_named_address(text: str, domain_name: str) -> bool:
    name = domain_name.lower()
    full = re.compile(re.escape(name) + _NAMED_TAIL, re.IGNORECASE)
    if full.search(text) or full.search(_compact(text)):
        return True
    for variant in domain_name_variants(name)[1:]:
        if re.search(rf"\b{re.escape(variant)}\b" + _NAMED_TAIL, text, re.IGNORECASE):
            return True
    return False


def _locale_postal_hit(text: str) -> bool:
    low = text.lower()
    for m in _POSTAL_PREFIX_RE.finditer(low):
        cities = POSTAL_PREFIX_CITIES.get(m.group(1))
        if cities and any(c in low for c in cities):
            return True
    return False


def address_relevance(
    address: str,
    confidence: int,
    domain_name: str,
    context: str | None = "",
) -> ScoreResult:
    t = _Tally(confidence * 0.3)
    addr_low = (address or "").lower()
    context = context or ""

    in_address = mentions_domain(address, domain_name)
    in_context = mentions_domain(context, domain_name)

    if in_address:
        structured = any(w in addr_low for w in ADDRESS_STREET_WORDS) or bool(
            _FIVE_DIGITS_RE.search(addr_low)
        )
        if structured:
            t.add("domain_in_structured_address", 50)
        else:
            t.add("domain_in_address", 30)
    if in_context:
        t.add("domain_in_context", 20)

    if domain_name and _has_complete_named_address(addr_low, domain_name):
        t.add("complete_named_address", 40)
    if _NUMBERED_STREET_RE.search(addr_low):
        t.add("numbered_street", 15)
    if (in_address or in_context) and _locale_postal_hit(addr_low):
        t.add("locale_postal_code", 25)

    t.extend(*apply_keyword_rules(ADDRESS_RULES, candidate=addr_low, context=context))
    return t.result()


def phone_relevance(phone: str, domain_name: str, context: str | None = "") -> ScoreResult:
    t = _Tally(30)
    context = context or ""

    if mentions_domain(context, domain_name):
        t.add("domain_in_context", 50)

    t.extend(*apply_keyword_rules(PHONE_RULES, candidate=phone, context=context))

    if (phone or "").startswith("+"):
        t.add("international_prefix", 10)
    if len(phone_digits(phone)) < 8:
        t.add("short_number", -20)
    return t.result()


def _same_domain(email_domain: str, domain_name: str) -> bool:
    if not email_domain or not domain_name:
        return False
    name = domain_name.lower()
    if name in email_domain or any(rx.search(email_domain) for rx in _variant_patterns(name)):
        return True
    label = email_domain.split(".")[0]
    return len(label) >= MIN_EMAIL_LABEL_LEN and label in domain_name


def email_relevance(email: str, domain_name: str, context: str | None = "") -> ScoreResult:
    t = _Tally(30)
    context = context or ""
    local, _, email_domain = (email or "").lower().partition("@")

    if _same_domain(email_domain, domain_name):
        t.add("same_domain", 60)
    if mentions_domain(context, domain_name):
        t.add("domain_in_context", 40)

    t.extend(
        *apply_keyword_rules(EMAIL_RULES, candidate=local, context=context, domain=email_domain)
    )

    bare = re.sub(r"[.-]", "", domain_name or "")
    if bare and bare in email_domain:
        t.add("exact_domain", 15)
    if email_domain in FREE_EMAIL_DOMAINS:
        t.add("free_provider", FREE_EMAIL_PENALTY)
    return t.result()


__all__ = [
    "NAME_PREFIXES",
    "domain_base_name",
    "domain_name_variants",
    "mentions_domain",
    "address_relevance",
    "phone_relevance",
    "email_relevance",
]
