# domain_scraper/scoring/confidence.py
from __future__ import annotations

import re

from ..extract.validators import is_valid_address_content
from ..models import ScoreResult, clamp_score

_FIVE_DIGITS_RE = re.compile(r"\d{5}")
_STREET_KEYWORD_RE = re.compile(r"(calle|avenida|plaza|street|avenue|road|rue)", re.IGNORECASE)
_ANY_DIGIT_RE = re.compile(r"\d+")
_CANONICAL_RE = re.compile(r"^\d+\s+[A-Za-z\s]+,\s*\d{5}\s+[A-Za-z\s]+", re.IGNORECASE)
_COUNTRY_TOKEN_RE = re.compile(
    r"(UK|United Kingdom|France|España|Spain|Germany|Italia|Italy)", re.IGNORECASE
)
_SPECIAL_CHAR_RE = re.compile(r"[^a-zA-Z0-9\s,.-]")

MAX_SPECIAL_CHARS = 5
MAX_DIGIT_RATIO = 0.5


def address_confidence(text: str) -> ScoreResult:
    """
    Plausibility of `text` as a postal address, independent of the domain.

    Returns 0 outright when the address-content blacklist rejects the text.
    """
    text = text or ""
    if not is_valid_address_content(text):
        return ScoreResult(score=0, reasons=["blacklisted"])

    score = 0
    reasons: list[str] = []

    def add(tag: str, delta: int) -> None:
        nonlocal score
        score += delta
        sign = "+" if delta >= 0 else ""
        reasons.append(f"{tag}{sign}{delta}")

    n = len(text)

    if _FIVE_DIGITS_RE.search(text):
        add("postal_code", 30)
    if _STREET_KEYWORD_RE.search(text):
        add("street_keyword", 25)
    if _ANY_DIGIT_RE.search(text):
        add("has_number", 20)
    if 20 < n < 150:
        add("length_ok", 15)
    if "," in text:
        add("has_comma", 10)
    if _CANONICAL_RE.search(text):
        add("canonical_shape", 20)
    if _COUNTRY_TOKEN_RE.search(text):
        add("country_token", 10)

    # penalties
    if n > 200:
        add("too_long", -15)
    if n < 15:
        add("too_short", -10)
    digits = sum(ch.isdigit() for ch in text)
    if n and digits / n > MAX_DIGIT_RATIO:
        add("mostly_digits", -20)
    if len(_SPECIAL_CHAR_RE.findall(text)) > MAX_SPECIAL_CHARS:
        add("special_chars", -15)

    return ScoreResult(score=clamp_score(score), reasons=reasons)


__all__ = ["address_confidence"]
