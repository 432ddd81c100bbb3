# domain_scraper/__init__.py
"""
Contact-information extraction and relevance ranking for a single domain.

Public API:
  - scrape_domain(domain, config=None, *, fetcher=None) -> dict   (JSON-ready envelope)
  - run_extraction(domain, config=None, *, fetcher=None) -> CrawlResult
  - ScrapeConfig / load_scrape_config()
"""

from __future__ import annotations

from .config import ScrapeConfig, load_scrape_config
from .exceptions import DomainValidationError, PageFetchError, ScraperError
from .models import CrawlResult
from .service import run_extraction, scrape_domain

__all__ = [
    "ScrapeConfig",
    "load_scrape_config",
    "ScraperError",
    "DomainValidationError",
    "PageFetchError",
    "CrawlResult",
    "run_extraction",
    "scrape_domain",
]
