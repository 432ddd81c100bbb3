# domain_scraper/exceptions.py
"""
Exceptions raised by the domain scraper.

Only two ever cross the public API: DomainValidationError from the entry
points and PageFetchError from the page fetcher.
"""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for every error raised by the domain scraper."""

    pass


class DomainValidationError(ScraperError, ValueError):
    """
    Raised when the caller-supplied domain is unusable.

    Examples:
        - missing / None
        - not a string
        - empty after stripping whitespace
    """

    pass


class PageFetchError(ScraperError):
    """
    Raised when a single page cannot be fetched.

    Examples:
        - timeouts (connect or read)
        - DNS / connection failures
        - non-2xx HTTP responses

    The crawl controller records these per page and keeps going.
    """

    def __init__(self, message: str, *, url: str, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


__all__ = [
    "ScraperError",
    "DomainValidationError",
    "PageFetchError",
]
