# domain_scraper/crawl/__init__.py
from __future__ import annotations

from .runner import crawl_domain
from .targets import normalize_domain, page_urls

__all__ = ["crawl_domain", "normalize_domain", "page_urls"]
