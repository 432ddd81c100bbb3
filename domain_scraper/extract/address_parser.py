"""
Address decomposition.

Turns a cleaned, single-line address into (street, city, postal_code,
country) with a small cascade of positional patterns:

  1. "<name>, <street>, <5-digit> <city>"
  2. "<street>, <5-digit> <city>[, <country>]"
  3. "<establishment-name>, <rest>"

followed by street / city / country fallbacks. The first pattern that
matches wins; later patterns are only tried when the earlier ones failed.
"""

# domain_scraper/extract/address_parser.py
from __future__ import annotations

import re

from ..models import ParsedAddress

_L = "A-Za-zÀ-ÿ"  # latin letters incl. accented

_POSTAL_RE = re.compile(r"(\d{5})")
_UK_POSTCODE_RE = re.compile(r"\b([A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2})\b")

_NAME_STREET_POSTAL_CITY_RE = re.compile(rf"^([^,]+),\s*(.+?),?\s*(\d{{5}})\s+([{_L}\s]+)$")
_STREET_POSTAL_CITY_RE = re.compile(
    rf"^(.+?),?\s*(\d{{5}})\s+([{_L}\s]+?)(?:,\s*([{_L}\s]+))?$"
)
_NAME_REST_RE = re.compile(r"^([^,]+),\s*(.+)$")

_PROPER_NAME_RE = re.compile(rf"^[{_L}\s\-.']+$")
_NUMBERED_STREET_RE = re.compile(
    r"^(\d+\s+(?:rue|avenue|boulevard|street|calle|avenida)[^,\d]{2,50})",
    re.IGNORECASE,
)
_TRAILING_POSTAL_CITY_RE = re.compile(rf"\s*\d{{5}}\s+[{_L}\s]+.*$")
_POSTAL_FIRST_WORD_RE = re.compile(rf"(\d{{5}})\s+([{_L}\s]+?)(?:\s|$)")
_CITY_AFTER_POSTAL_RE = re.compile(rf"\d{{5}}\s+([{_L}\s]+?)(?:,|$)")

# Fallback gazetteer, checked in order
KNOWN_CITIES: tuple[str, ...] = (
    "Paris",
    "Londres",
    "Madrid",
    "Barcelona",
    "Lyon",
    "Marseille",
    "London",
    "New York",
    "Rome",
    "Milano",
)

COUNTRY_INDICATORS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "Spain",
        re.compile(r"\b(españa|spain|madrid|barcelona|valencia|sevilla)\b", re.IGNORECASE),
    ),
    (
        "France",
        re.compile(r"\b(france|francia|paris|lyon|marseille)\b", re.IGNORECASE),
    ),
    (
        "United Kingdom",
        re.compile(r"\b(uk|united kingdom|london|manchester)\b", re.IGNORECASE),
    ),
)

_STREET_EDGE_RE = re.compile(r"^[\"'`>\\(\[{]+|[\"'`<\\)\]}]+$")
_STREET_LEADING_RE = re.compile(r"^\s*[>\"]")
_STREET_TAIL_RE = re.compile(r"\s*[<\"].*$")
_PLAIN_EDGE_RE = re.compile(r"^[\"'`(\[{]+|[\"'`)\]}]+$")

MIN_STREET_LEN = 3


def detect_country(text: str) -> str | None:
    for country, rx in COUNTRY_INDICATORS:
        if rx.search(text or ""):
            return country
    return None


def extract_postal_code(text: str) -> str | None:
    """First 5-digit run; failing that, the first UK-style postcode."""
    m = _POSTAL_RE.search(text or "")
    if m:
        return m.group(1)
    uk = _UK_POSTCODE_RE.search(text or "")
    return uk.group(1) if uk else None


def _clean_street(street: str) -> str:
    street = _STREET_EDGE_RE.sub("", street)
    street = _STREET_LEADING_RE.sub("", street)
    street = _STREET_TAIL_RE.sub("", street)
    return street.strip()


def _clean_plain(value: str) -> str:
    return _PLAIN_EDGE_RE.sub("", value).strip()


def _match_structure(address: str) -> tuple[str | None, str | None, str | None]:
    """Run the three positional patterns; returns (street, city, country)."""
    m = _NAME_STREET_POSTAL_CITY_RE.match(address)
    if m:
        return m.group(2).strip(), m.group(4).strip(), None

    m = _STREET_POSTAL_CITY_RE.match(address)
    if m:
        country = m.group(4).strip() if m.group(4) else None
        return m.group(1).strip(), m.group(3).strip(), country

    m = _NAME_REST_RE.match(address)
    if not m:
        return None, None, None

    first, rest = m.group(1).strip(), m.group(2).strip()
    if len(first) >= 50 or not _PROPER_NAME_RE.match(first):
        return first, None, None

    # First segment reads like an establishment name; the rest is the address
    numbered = _NUMBERED_STREET_RE.match(rest)
    if numbered:
        street = numbered.group(1).strip()
    else:
        street = _TRAILING_POSTAL_CITY_RE.sub("", rest).strip()

    city = None
    pc = _POSTAL_FIRST_WORD_RE.search(rest)
    if pc:
        city = pc.group(2).strip()
    return street, city, None


def parse_address(address: str) -> ParsedAddress:
    """
    Decompose a cleaned address string.

    >>> parse_address("Hotel Le Meurice, 228 rue de Rivoli, 75001 Paris")
    ParsedAddress(street='228 rue de Rivoli', city='Paris', postal_code='75001', country='France')
    """
    address = (address or "").strip()
    postal_code = extract_postal_code(address)

    street, city, country = _match_structure(address)

    if not street:
        street = address.split(",")[0].strip() or address[:50].strip()

    if not city:
        m = _CITY_AFTER_POSTAL_RE.search(address)
        if m:
            city = m.group(1).strip()
        else:
            low = address.lower()
            for known in KNOWN_CITIES:
                if known.lower() in low:
                    city = known
                    break

    street = _clean_street(street) if street else None
    city = _clean_plain(city) if city else None
    country = _clean_plain(country) if country else None

    if street and len(street) < MIN_STREET_LEN:
        street = None

    return ParsedAddress(
        street=street or None,
        city=city or None,
        postal_code=postal_code,
        country=country or detect_country(address),
    )


__all__ = [
    "KNOWN_CITIES",
    "COUNTRY_INDICATORS",
    "MIN_STREET_LEN",
    "detect_country",
    "extract_postal_code",
    "parse_address",
]
