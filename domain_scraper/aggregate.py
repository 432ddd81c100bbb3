"""
Result Aggregator.

Cross-page ranking, capping and response shaping. `merge_page_result` is the
fold step the crawl controller applies after every page; it never mutates
its inputs and returns a fresh `CrawlResult`.
"""

# domain_scraper/aggregate.py
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from urllib.parse import urlsplit
from typing import Any

from .config import ScrapeConfig
from .dedupe import dedupe_addresses, dedupe_emails, dedupe_phones, dedupe_social
from .models import (
    CandidateAddress,
    CandidateEmail,
    CandidatePhone,
    CrawlResult,
    PageError,
    PageExtractionResult,
)
from .scoring.relevance import domain_base_name, email_relevance, phone_relevance

log = logging.getLogger(__name__)

HIGH_SCORE = 70


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def rank_addresses(addresses: Iterable[CandidateAddress]) -> list[CandidateAddress]:
    """Highest final score first (confidence 40%, relevance 60%)."""
    return sorted(addresses, key=lambda a: a.final_score, reverse=True)


def select_phones(
    phones: Iterable[CandidatePhone],
    domain_name: str,
    config: ScrapeConfig | None = None,
) -> list[CandidatePhone]:
    """Re-score every phone against its own context and keep the single best."""
    cfg = config or ScrapeConfig()
    rescored = [
        replace(p, relevance_score=phone_relevance(p.phone, domain_name, p.context).score)
        for p in phones
    ]
    return dedupe_phones(rescored, cfg)[:1]


def select_emails(
    emails: Iterable[CandidateEmail],
    domain_name: str,
    config: ScrapeConfig | None = None,
) -> list[CandidateEmail]:
    """
    Re-score and dedupe by value. Keep up to `max_emails` relevant ones
    (score >= `email_min_relevance`); with none relevant, keep the best one.
    """
    cfg = config or ScrapeConfig()
    rescored = [
        replace(e, relevance_score=email_relevance(e.email, domain_name, e.context).score)
        for e in emails
    ]
    unique = dedupe_emails(rescored)
    relevant = [e for e in unique if e.relevance_score >= cfg.email_min_relevance]
    if relevant:
        return relevant[: cfg.max_emails]
    return unique[:1]


# ---------------------------------------------------------------------------
# Fold
# ---------------------------------------------------------------------------


def _page_path(url: str) -> str:
    # Same shape the crawl records for fetch failures ("/contact")
    return urlsplit(url).path or "/"


def merge_page_result(
    crawl: CrawlResult,
    page: PageExtractionResult,
    config: ScrapeConfig | None = None,
) -> CrawlResult:
    cfg = config or ScrapeConfig()
    domain_name = domain_base_name(crawl.domain)
    page_errors = tuple(PageError(page=_page_path(page.url), error=msg) for msg in page.errors)

    return replace(
        crawl,
        addresses=tuple(dedupe_addresses([*crawl.addresses, *page.addresses], cfg)),
        phones=tuple(select_phones([*crawl.phones, *page.phones], domain_name, cfg)),
        emails=tuple(select_emails([*crawl.emails, *page.emails], domain_name, cfg)),
        social_medias=tuple(dedupe_social([*crawl.social_medias, *page.social_medias])),
        pages_analyzed=crawl.pages_analyzed + 1,
        errors=crawl.errors + page_errors,
    )


def should_stop(crawl: CrawlResult, config: ScrapeConfig | None = None) -> bool:
    """Enough strong address evidence to skip the remaining pages?"""
    cfg = config or ScrapeConfig()
    relevant = sum(1 for a in crawl.addresses if a.relevance_score >= cfg.early_stop_relevance)
    confident = sum(1 for a in crawl.addresses if a.confidence >= cfg.early_stop_confidence)
    stop = (
        relevant >= cfg.early_stop_relevant_count
        or confident >= cfg.early_stop_confident_count
    )
    if stop:
        log.debug(
            "early stop threshold reached",
            extra={"relevant": relevant, "confident": confident, "domain": crawl.domain},
        )
    return stop


# ---------------------------------------------------------------------------
# Response shaping
# ---------------------------------------------------------------------------


def build_response(crawl: CrawlResult) -> dict[str, Any]:
    ranked = rank_addresses(crawl.addresses)
    return {
        "domain": crawl.domain,
        "addresses": [ranked[0].to_dict()] if ranked else [],
        "phones": [p.phone for p in crawl.phones],
        "emails": [e.email for e in crawl.emails],
        "socialMedias": [s.to_dict() for s in crawl.social_medias],
        "pagesAnalyzed": crawl.pages_analyzed,
    }


def interpret_results(crawl: CrawlResult, domain_name: str = "") -> dict[str, Any]:
    total = len(crawl.addresses)
    high_confidence = sum(1 for a in crawl.addresses if a.confidence >= HIGH_SCORE)
    domain_relevant = sum(1 for a in crawl.addresses if a.relevance_score >= HIGH_SCORE)

    recommendations: list[str] = []
    if total and domain_relevant:
        status = "success_with_relevance"
        message = (
            f"Found {total} addresses, {domain_relevant} highly relevant to {domain_name!r}"
        )
        recommendations.append(f"The most relevant address for {domain_name!r} is listed first")
    elif total and high_confidence:
        status = "success"
        message = f"Found {total} addresses, {high_confidence} with high confidence"
        recommendations.append("Check which address belongs specifically to the domain")
    elif total:
        status = "partial_success"
        message = f"Found {total} addresses with medium-low confidence"
        recommendations.append("Verify the extracted addresses manually")
        recommendations.append("No address shows high relevance to the domain")
    else:
        status = "no_data"
        message = "No addresses found"
        recommendations.append("Try analysing more pages of the website")
        recommendations.append("Check that the website publishes contact information")
        if domain_name:
            recommendations.append(f"Search specifically for contact information for {domain_name!r}")

    return {
        "status": status,
        "message": message,
        "recommendations": recommendations,
        "statistics": {
            "totalAddresses": total,
            "highConfidenceAddresses": high_confidence,
            "domainRelevantAddresses": domain_relevant,
            "pagesAnalyzed": crawl.pages_analyzed,
            "errors": len(crawl.errors),
        },
    }


__all__ = [
    "rank_addresses",
    "select_phones",
    "select_emails",
    "merge_page_result",
    "should_stop",
    "build_response",
    "interpret_results",
]
