# domain_scraper/fetch/__init__.py
"""
Page fetcher: a small httpx client.

Crawler-facing API:
  - FetcherClient(user_agent=..., timeout_s=...).fetch_text(url) -> str
  - FetcherClient.fetch(url) -> FetchResult
"""

from .client import FetcherClient, FetchResult

__all__ = ["FetcherClient", "FetchResult"]
