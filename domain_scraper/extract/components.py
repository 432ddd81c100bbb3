"""
Address composition from scattered components.

Some sites never print an address on one line: the street sits in one
element, the postcode in another and the city is implied. This pass collects
UK-style street fragments, postcodes and city names from contact/footer
regions and composes "<street>, <postcode> <city>" candidates from them.
"""

# domain_scraper/extract/components.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from ..models import CandidateAddress, Provenance
from ..scoring.confidence import address_confidence
from ..scoring.relevance import address_relevance
from .address_parser import parse_address
from .patterns import COMPONENT_SELECTORS
from .validators import is_valid_address

log = logging.getLogger(__name__)

_STREET_TYPES = (
    r"(?:Street|St|Road|Rd|Avenue|Ave|Lane|Square|Sq|Place|Pl|Close|Crescent|Gardens|"
    r"Court|Ct|Drive|Dr|Way|Walk|Row|Mews|Terrace|Grove|Hill|Park|Green|Common)"
)

STREET_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        rf"\b(\d{{1,5}}(?:-\d{{1,5}})?\s+[A-Za-z\s]{{1,60}}{_STREET_TYPES})\b", re.IGNORECASE
    ),
    re.compile(
        r"\b(Conway\s+Street|Regent\s+Street|Oxford\s+Street|Bond\s+Street|Baker\s+Street|"
        r"Piccadilly|Mayfair|Covent\s+Garden)",
        re.IGNORECASE,
    ),
)
POSTCODE_PATTERN = re.compile(r"\b([A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2})\b")

UK_CITIES: tuple[str, ...] = (
    "London", "Manchester", "Birmingham", "Liverpool", "Leeds", "Sheffield",
    "Bristol", "Newcastle", "Nottingham", "Leicester", "Coventry", "Hull",
    "Bradford", "Cardiff", "Belfast", "Edinburgh", "Glasgow", "Aberdeen",
)  # fmt: skip
CITY_PATTERN = re.compile(rf"\b({'|'.join(UK_CITIES)})\b", re.IGNORECASE)

DEFAULT_CITY = "London"
COMPONENT_COUNTRY = "United Kingdom"
MIN_COMPONENT_CONFIDENCE = 30


@dataclass
class AddressComponents:
    streets: list[str] = field(default_factory=list)
    postcodes: list[str] = field(default_factory=list)
    cities: list[str] = field(default_factory=list)

    def add(self, bucket: list[str], value: str) -> None:
        value = value.strip()
        if value and value not in bucket:
            bucket.append(value)


def collect_components(soup: BeautifulSoup) -> AddressComponents:
    comps = AddressComponents()
    for selector in COMPONENT_SELECTORS:
        for element in soup.select(selector):
            text = element.get_text(" ")
            for rx in STREET_PATTERNS:
                for m in rx.finditer(text):
                    comps.add(comps.streets, " ".join(m.group(1).split()))
            for m in POSTCODE_PATTERN.finditer(text):
                comps.add(comps.postcodes, m.group(1))
            for m in CITY_PATTERN.finditer(text):
                comps.add(comps.cities, m.group(1))
    return comps


def compose_addresses(comps: AddressComponents, domain_name: str) -> list[CandidateAddress]:
    """One candidate per street, paired with the first postcode and city seen."""
    if not comps.streets or not (comps.postcodes or comps.cities):
        return []

    postcode = comps.postcodes[0] if comps.postcodes else ""
    city = comps.cities[0] if comps.cities else DEFAULT_CITY

    out: list[CandidateAddress] = []
    for street in comps.streets:
        full = f"{street}, {postcode} {city}".replace(",  ", ", ").strip()
        parsed = parse_address(full)
        if not is_valid_address(parsed):
            continue
        confidence = address_confidence(full).score
        if confidence <= MIN_COMPONENT_CONFIDENCE:
            log.debug("composed address below confidence floor", extra={"address": full})
            continue
        context = f"Intelligent extraction: {street}"
        relevance = address_relevance(full, confidence, domain_name, context).score
        out.append(
            CandidateAddress(
                full=full,
                street=parsed.street,
                city=parsed.city,
                postal_code=parsed.postal_code,
                country=COMPONENT_COUNTRY,
                confidence=confidence,
                relevance_score=relevance,
                provenance=Provenance.COMPONENTS,
                context=context,
            )
        )
    return out


def extract_component_addresses(soup: BeautifulSoup, domain_name: str) -> list[CandidateAddress]:
    return compose_addresses(collect_components(soup), domain_name)


__all__ = [
    "STREET_PATTERNS",
    "POSTCODE_PATTERN",
    "UK_CITIES",
    "AddressComponents",
    "collect_components",
    "compose_addresses",
    "extract_component_addresses",
]
