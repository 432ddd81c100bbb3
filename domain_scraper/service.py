"""
Extraction entry points.

`run_extraction` is the typed core: normalize the domain, crawl, geocode the
winning address and return the CrawlResult. `scrape_domain` wraps it in the
JSON-ready envelope callers consume and never raises.
"""

# domain_scraper/service.py
from __future__ import annotations

import logging
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from .aggregate import build_response, interpret_results, rank_addresses
from .config import ScrapeConfig
from .crawl.runner import PageFetcher, crawl_domain
from .crawl.targets import normalize_domain
from .exceptions import DomainValidationError
from .geocode import validate_address
from .models import CrawlResult
from .scoring.relevance import domain_base_name

log = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def run_extraction(
    domain: object,
    config: ScrapeConfig | None = None,
    *,
    fetcher: PageFetcher | None = None,
) -> CrawlResult:
    """
    Crawl `domain` and return the ranked CrawlResult (addresses sorted by
    final score, top address geocoded when a key is configured).

    Raises DomainValidationError for a missing or non-string domain.
    """
    normalized = normalize_domain(domain)
    cfg = config or ScrapeConfig()

    crawl = crawl_domain(normalized, cfg, fetcher=fetcher)

    ranked = rank_addresses(crawl.addresses)
    if ranked and cfg.geocode_enabled:
        ranked[0] = validate_address(ranked[0], cfg)
    return replace(crawl, addresses=tuple(ranked))


def scrape_domain(
    domain: object,
    config: ScrapeConfig | None = None,
    *,
    fetcher: PageFetcher | None = None,
) -> dict[str, Any]:
    """Envelope form of `run_extraction`; failures become `success: False`."""
    started = time.perf_counter()
    try:
        crawl = run_extraction(domain, config, fetcher=fetcher)
    except DomainValidationError as exc:
        return {
            "success": False,
            "error": str(exc),
            "errorType": "validation_error",
            "timestamp": _utc_now_iso(),
        }
    except Exception as exc:
        log.exception("scrape failed for %r", domain)
        return {
            "success": False,
            "error": str(exc),
            "errorType": "scraping_error",
            "timestamp": _utc_now_iso(),
        }

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    log.info(
        "extraction complete %s (%dms)",
        crawl.domain,
        elapsed_ms,
        extra={"pages_analyzed": crawl.pages_analyzed, "errors": len(crawl.errors)},
    )
    return {
        "success": True,
        "domain": crawl.domain,
        "extractedData": build_response(crawl),
        "analysis": interpret_results(crawl, domain_base_name(crawl.domain)),
        "responseTimeMs": elapsed_ms,
        "timestamp": _utc_now_iso(),
    }


__all__ = ["run_extraction", "scrape_domain"]
