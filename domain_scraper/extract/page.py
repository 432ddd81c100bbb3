"""
Page Extraction Unit.

Runs every extractor, the parser and both scorers over one fetched HTML
document and returns a `PageExtractionResult`. Pure with respect to its
inputs: no network, no shared state.

Passes, in order:
  1. social handles (social regions, social links, raw HTML)
  2. addresses over the full page text (±200 chars context)
  3. addresses over each contextual DOM region (text + markup as context)
  4. component-composed addresses
  5. phones and emails over the full page text (±100 chars context), plus
     mailto: links
"""

# domain_scraper/extract/page.py
from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

from ..aggregate import select_emails, select_phones
from ..config import ScrapeConfig
from ..dedupe import dedupe_addresses
from ..models import CandidateAddress, CandidateEmail, CandidatePhone, PageExtractionResult, Provenance
from ..scoring.confidence import address_confidence
from ..scoring.relevance import address_relevance, domain_base_name, email_relevance, phone_relevance
from .address_parser import parse_address
from .cleaning import clean_address, clean_email, clean_phone
from .components import extract_component_addresses
from .patterns import (
    ADDRESS_CONTEXT_WINDOW,
    ADDRESS_RULES,
    CONTEXTUAL_SELECTORS,
    EMAIL_CONTEXT_WINDOW,
    EMAIL_RULES,
    MIN_ADDRESS_MATCH_LEN,
    PHONE_CONTEXT_WINDOW,
    PHONE_RULES,
    find_matches,
    normalize_text,
    page_text,
)
from .social import extract_social
from .validators import is_valid_address, is_valid_email, is_valid_phone

log = logging.getLogger(__name__)

_MAILTO_RE = re.compile(r"^mailto:", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------


def _address_candidate(
    raw: str,
    domain_name: str,
    relevance_context: str,
    *,
    provenance: Provenance,
    stored_context: str,
) -> CandidateAddress | None:
    if not raw or len(raw) <= MIN_ADDRESS_MATCH_LEN:
        return None
    cleaned = clean_address(raw)
    parsed = parse_address(cleaned)
    if not is_valid_address(parsed):
        log.debug("address rejected", extra={"address": cleaned[:120]})
        return None

    confidence = address_confidence(cleaned).score
    relevance = address_relevance(cleaned, confidence, domain_name, relevance_context).score
    return CandidateAddress(
        full=cleaned,
        street=parsed.street,
        city=parsed.city,
        postal_code=parsed.postal_code,
        country=parsed.country,
        confidence=confidence,
        relevance_score=relevance,
        provenance=provenance,
        context=stored_context,
    )


def extract_text_addresses(text: str, domain_name: str) -> list[CandidateAddress]:
    out: list[CandidateAddress] = []
    for rule in ADDRESS_RULES:
        for m in find_matches(rule, text, ADDRESS_CONTEXT_WINDOW):
            cand = _address_candidate(
                m.value,
                domain_name,
                m.context,
                provenance=Provenance.TEXT,
                stored_context=m.context,
            )
            if cand is not None:
                out.append(cand)
    return out


def extract_structured_addresses(soup: BeautifulSoup, domain_name: str) -> list[CandidateAddress]:
    out: list[CandidateAddress] = []
    for selector in CONTEXTUAL_SELECTORS:
        for element in soup.select(selector):
            text = normalize_text(element.get_text(" "))
            context = f"{text} {element.decode_contents()}"
            for rule in ADDRESS_RULES:
                for m in find_matches(rule, text):
                    cand = _address_candidate(
                        m.value,
                        domain_name,
                        context,
                        provenance=Provenance.STRUCTURED,
                        stored_context=f"Structured element: {selector}",
                    )
                    if cand is not None:
                        out.append(cand)
    return out


# ---------------------------------------------------------------------------
# Phones / emails
# ---------------------------------------------------------------------------


def extract_phones(text: str, domain_name: str) -> list[CandidatePhone]:
    out: list[CandidatePhone] = []
    for rule in PHONE_RULES:
        for m in find_matches(rule, text, PHONE_CONTEXT_WINDOW):
            phone = clean_phone(m.value)
            if not is_valid_phone(phone):
                continue
            score = phone_relevance(phone, domain_name, m.context).score
            out.append(CandidatePhone(phone=phone, relevance_score=score, context=m.context))
    return out


def extract_emails(text: str, soup: BeautifulSoup, domain_name: str) -> list[CandidateEmail]:
    out: list[CandidateEmail] = []
    for rule in EMAIL_RULES:
        for m in find_matches(rule, text, EMAIL_CONTEXT_WINDOW):
            email = clean_email(m.value)
            if not is_valid_email(email):
                continue
            score = email_relevance(email, domain_name, m.context).score
            out.append(CandidateEmail(email=email, relevance_score=score, context=m.context))

    # mailto: links whose address is not printed in the text
    for a in soup.find_all("a", href=_MAILTO_RE):
        email = clean_email(_MAILTO_RE.sub("", a["href"]).split("?")[0])
        if not is_valid_email(email):
            continue
        context = normalize_text(a.parent.get_text(" ")) if a.parent else ""
        score = email_relevance(email, domain_name, context).score
        out.append(CandidateEmail(email=email, relevance_score=score, context=context))
    return out


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def extract_page(
    html: str,
    domain: str,
    config: ScrapeConfig | None = None,
    *,
    url: str = "",
) -> PageExtractionResult:
    """Extract, validate, score and dedupe every candidate on one page."""
    cfg = config or ScrapeConfig()
    domain_name = domain_base_name(domain)
    result = PageExtractionResult(url=url or domain)

    raw_html = html or ""
    soup = BeautifulSoup(raw_html, "html.parser")
    # social scanning needs anchors and markup before scripts are stripped
    result.social_medias = extract_social(soup, raw_html)

    text = page_text(soup)

    addresses = extract_text_addresses(text, domain_name)
    addresses += extract_structured_addresses(soup, domain_name)
    addresses += extract_component_addresses(soup, domain_name)
    result.addresses = dedupe_addresses(addresses, cfg)

    if cfg.include_phone:
        result.phones = select_phones(extract_phones(text, domain_name), domain_name, cfg)
    if cfg.include_email:
        result.emails = select_emails(extract_emails(text, soup, domain_name), domain_name, cfg)

    log.debug(
        "page extracted",
        extra={
            "url": result.url,
            "addresses": len(result.addresses),
            "phones": len(result.phones),
            "emails": len(result.emails),
            "social": len(result.social_medias),
        },
    )
    return result


__all__ = [
    "extract_text_addresses",
    "extract_structured_addresses",
    "extract_phones",
    "extract_emails",
    "extract_page",
]
